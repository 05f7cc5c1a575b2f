"""OpenRTB request building and response mapping."""

from .request_builder import build_imp, build_request, build_user
from .response_mapper import NO_BID_STATUS, decode_response, map_response

__all__ = [
    "NO_BID_STATUS",
    "build_imp",
    "build_request",
    "build_user",
    "decode_response",
    "map_response",
]
