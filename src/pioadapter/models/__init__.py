"""Adapter Models and Data Types."""

from .openrtb import Banner, Bid, BidRequest, BidResponse, Imp, Publisher, SeatBid, Site
from .output_bid import OutputBid
from .slot_request import (
    AdapterBidder,
    AdapterRequest,
    DebugRecord,
    DictUserSyncStore,
    Format,
    SlotRequest,
    UserSyncStore,
)
from .validated_params import ValidatedParams, ValidationResult

__all__ = [
    "AdapterBidder",
    "AdapterRequest",
    "Banner",
    "Bid",
    "BidRequest",
    "BidResponse",
    "DebugRecord",
    "DictUserSyncStore",
    "Format",
    "Imp",
    "OutputBid",
    "Publisher",
    "SeatBid",
    "Site",
    "SlotRequest",
    "UserSyncStore",
    "ValidatedParams",
    "ValidationResult",
]
