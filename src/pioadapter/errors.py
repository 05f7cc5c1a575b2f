"""
Adapter error types.

Slot-level parameter errors are recoverable per slot; everything else
aborts the whole call. Messages of ParamError subclasses are matched
literally by callers, so their format must not change.
"""

from typing import Any, Optional


class AdapterError(Exception):
    """Base exception for Platformio adapter errors."""
    pass


class ParamError(AdapterError):
    """Raised when a slot's bidder params fail validation."""
    pass


class MissingFieldError(ParamError):
    """A required bidder param is absent or empty."""

    def __init__(self, label: str, key: str):
        self.label = label
        self.key = key
        super().__init__(f"Missing {label} param {key}")


class InvalidFieldError(ParamError):
    """A bidder param is present but malformed."""

    def __init__(self, label: str, value: Any):
        self.label = label
        self.value = value
        super().__init__(f"Invalid {label} param {value}")


class InvalidParamsError(ParamError):
    """The params payload itself could not be parsed."""
    pass


class NoValidImpressionsError(AdapterError):
    """Raised when no impression survives validation."""
    pass


class TransportError(AdapterError):
    """Connection failure or unexpected HTTP status from the exchange."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class DeadlineExceededError(TransportError):
    """The caller's deadline passed before or during the exchange call."""
    pass


class DecodeError(AdapterError):
    """The exchange response body could not be parsed."""
    pass
