"""Validated Platformio bidder params."""

from dataclasses import dataclass
from typing import Optional

from ..errors import ParamError


@dataclass(frozen=True)
class ValidatedParams:
    """
    Bidder params for one slot after validation.

    Ids are kept as strings regardless of whether the publisher sent
    them as JSON numbers or strings.
    """

    publisher_id: str
    placement_id: str
    site_id: str
    width: int
    height: int
    bid_floor: Optional[float] = None

    @property
    def size(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one slot: params on success, else the error."""

    params: Optional[ValidatedParams] = None
    error: Optional[ParamError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, params: ValidatedParams) -> "ValidationResult":
        return cls(params=params)

    @classmethod
    def failure(cls, error: ParamError) -> "ValidationResult":
        return cls(error=error)
