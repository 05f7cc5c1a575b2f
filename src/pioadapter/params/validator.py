"""
Platformio bidder params validation.

Turns the untyped params payload of one slot into ValidatedParams, or a
single ParamError describing the first problem found. Checks run in a
fixed order and the error messages are part of the adapter's contract.
"""

import json
import math
import re
from typing import Any, Optional

from ..errors import InvalidFieldError, InvalidParamsError, MissingFieldError, ParamError
from ..models.validated_params import ValidatedParams, ValidationResult

PLACEMENT_ID_KEY = "placementId"
PUBLISHER_ID_KEY = "pubId"
SITE_ID_KEY = "siteId"
SIZE_KEY = "size"
BID_FLOOR_KEY = "bidFloor"

_DIMENSION_RE = re.compile(r"[0-9]+")


def parse_params(raw: Any) -> dict[str, Any]:
    """
    Decode a raw params payload into a dict.

    Raises:
        InvalidParamsError: If the payload is not a JSON object
    """
    if raw is None:
        return {}
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidParamsError(f"Invalid params: {e.msg}") from e
    if not isinstance(raw, dict):
        raise InvalidParamsError(
            f"Invalid params: expected an object, got {type(raw).__name__}"
        )
    return raw


def _id_value(params: dict[str, Any], key: str, label: str) -> str:
    """Read an id that may be sent as a JSON number or a string."""
    value = params.get(key)
    if value is None or value == "":
        raise MissingFieldError(label, key)
    if isinstance(value, bool):
        raise InvalidFieldError(label, value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        if not value.strip():
            raise MissingFieldError(label, key)
        return value.strip()
    raise InvalidFieldError(label, value)


def _dimension(token: str, label: str) -> int:
    if not _DIMENSION_RE.fullmatch(token) or int(token) <= 0:
        raise InvalidFieldError(label, token)
    return int(token)


def parse_size(size: str) -> tuple[int, int]:
    """
    Parse a "<w>x<h>" size string, separator case-insensitive.

    Raises:
        InvalidFieldError: AdSize when there is not exactly one separator,
            otherwise Width or Height for the offending token
    """
    parts = size.lower().split("x")
    if len(parts) != 2:
        raise InvalidFieldError("AdSize", size)
    width = _dimension(parts[0], "Width")
    height = _dimension(parts[1], "Height")
    return width, height


def _bid_floor(params: dict[str, Any]) -> Optional[float]:
    value = params.get(BID_FLOOR_KEY)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidFieldError("BidFloor", value)
    try:
        floor = float(value)
    except (TypeError, ValueError):
        raise InvalidFieldError("BidFloor", value) from None
    if not math.isfinite(floor) or floor < 0:
        raise InvalidFieldError("BidFloor", value)
    return floor


def _validate(raw: Any) -> ValidatedParams:
    params = parse_params(raw)

    placement_id = _id_value(params, PLACEMENT_ID_KEY, "TagId")
    publisher_id = _id_value(params, PUBLISHER_ID_KEY, "PublisherId")

    size = params.get(SIZE_KEY)
    if size is None or size == "":
        raise MissingFieldError("AdSize", SIZE_KEY)
    if not isinstance(size, str):
        raise InvalidFieldError("AdSize", size)
    width, height = parse_size(size)

    site_id = _id_value(params, SITE_ID_KEY, "SiteId")

    return ValidatedParams(
        publisher_id=publisher_id,
        placement_id=placement_id,
        site_id=site_id,
        width=width,
        height=height,
        bid_floor=_bid_floor(params),
    )


def validate_params(raw: Any) -> ValidationResult:
    """
    Validate one slot's Platformio params.

    Args:
        raw: Params as a mapping, JSON text or bytes

    Returns:
        ValidationResult holding either the params or the first error
    """
    try:
        return ValidationResult.success(_validate(raw))
    except ParamError as e:
        return ValidationResult.failure(e)
