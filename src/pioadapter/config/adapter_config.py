"""
Platformio Adapter Configuration

Loads the exchange endpoint, user sync template and HTTP settings from a
YAML file, with environment variable overrides.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_ENDPOINT = "http://ads.platformio.com/bid"
DEFAULT_USERSYNC_URL = "http://ads.platformio.com/usersync?rurl="
DEFAULT_EXTERNAL_URL = "http://localhost:8000"

# Environment variable -> config key
ENV_OVERRIDES: dict[str, str] = {
    "PLATFORMIO_ENDPOINT": "endpoint",
    "PLATFORMIO_USERSYNC_URL": "usersync_url",
    "PLATFORMIO_EXTERNAL_URL": "external_url",
    "PLATFORMIO_TIMEOUT_MS": "timeout_ms",
}


@dataclass
class AdapterConfig:
    """
    Configuration for the Platformio adapter.

    Attributes:
        endpoint: Exchange OpenRTB endpoint URL
        usersync_url: User sync URL template
        external_url: Public base URL of this host, used for /setuid
        timeout_ms: Upper bound on the exchange call
        protocol_version: Value of the x-openrtb-version header
        custom_headers: Extra headers sent with every bid request
    """

    endpoint: str = DEFAULT_ENDPOINT
    usersync_url: str = DEFAULT_USERSYNC_URL
    external_url: str = DEFAULT_EXTERNAL_URL
    timeout_ms: int = 200
    protocol_version: str = "2.5"
    custom_headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate values after initialization."""
        if not self.endpoint:
            raise ValueError("endpoint must not be empty")
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "endpoint": self.endpoint,
            "usersync_url": self.usersync_url,
            "external_url": self.external_url,
            "timeout_ms": self.timeout_ms,
            "protocol_version": self.protocol_version,
            "custom_headers": self.custom_headers,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AdapterConfig":
        """Create from dictionary."""
        return cls(
            endpoint=data.get("endpoint", DEFAULT_ENDPOINT),
            usersync_url=data.get("usersync_url", DEFAULT_USERSYNC_URL),
            external_url=data.get("external_url", DEFAULT_EXTERNAL_URL),
            timeout_ms=int(data.get("timeout_ms", 200)),
            protocol_version=str(data.get("protocol_version", "2.5")),
            custom_headers=data.get("custom_headers", {}) or {},
        )


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    data = dict(data)
    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data[key] = value
    return data


def load_adapter_config(path: str | Path | None = None) -> AdapterConfig:
    """
    Load adapter configuration.

    Args:
        path: YAML file to read. Defaults to $PLATFORMIO_CONFIG, then
              config/platformio.yaml at the project root. A missing file
              yields the defaults.

    Returns:
        AdapterConfig with environment overrides applied

    Raises:
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If the resulting values are invalid
    """
    if path is None:
        path = os.environ.get(
            "PLATFORMIO_CONFIG",
            str(Path(__file__).parent.parent.parent.parent / "config" / "platformio.yaml"),
        )
    path = Path(path)

    data: dict[str, Any] = {}
    if path.exists():
        with open(path) as f:
            loaded = yaml.safe_load(f)
        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ValueError(f"{path}: expected a mapping, got {type(loaded).__name__}")
            # Accept either a bare mapping or one nested under "platformio"
            data = loaded.get("platformio", loaded)
            if data is None:
                data = {}
            elif not isinstance(data, dict):
                raise ValueError(f"{path}: platformio must be a mapping, got {type(data).__name__}")
        logger.debug("Loaded adapter config", path=str(path))
    else:
        logger.debug("Adapter config file not found, using defaults", path=str(path))

    return AdapterConfig.from_dict(_apply_env_overrides(data))


# Global instance for easy access
_config: AdapterConfig | None = None


def get_adapter_config() -> AdapterConfig:
    """Get the global adapter configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_adapter_config()
    return _config


def reset_adapter_config() -> None:
    """Drop the cached global configuration."""
    global _config
    _config = None
