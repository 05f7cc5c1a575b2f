"""Adapter configuration."""

from .adapter_config import (
    AdapterConfig,
    get_adapter_config,
    load_adapter_config,
    reset_adapter_config,
)

__all__ = [
    "AdapterConfig",
    "get_adapter_config",
    "load_adapter_config",
    "reset_adapter_config",
]
