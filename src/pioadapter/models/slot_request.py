"""
Inbound request models handed to the adapter by request intake.

These are read-only to the adapter, with the exception of
AdapterBidder.debug which collects per-call debug records.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Union


@dataclass(frozen=True)
class Format:
    """A declared ad size."""

    w: int
    h: int

    def to_dict(self) -> dict[str, int]:
        return {"w": self.w, "h": self.h}


@dataclass
class SlotRequest:
    """
    One ad slot destined for this exchange.

    Attributes:
        code: Slot code, unique within the publisher request
        bid_id: Opaque caller token, returned unchanged on the bid
        params: Raw bidder params (mapping, JSON text or bytes)
        sizes: Sizes declared by the publisher for the slot
        media_types: Media types the slot accepts
        instl: 1 if the slot is interstitial
        topframe: 1 if the slot is in the top frame
    """

    code: str
    bid_id: str = ""
    params: Union[dict[str, Any], str, bytes, None] = None
    sizes: list[Format] = field(default_factory=list)
    media_types: list[str] = field(default_factory=lambda: ["banner"])
    instl: int = 0
    topframe: int = 0


@dataclass
class DebugRecord:
    """Request/response capture for a debug-enabled call."""

    request_uri: str
    request_body: str
    response_body: str = ""
    status_code: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_uri": self.request_uri,
            "request_body": self.request_body,
            "response_body": self.response_body,
            "status_code": self.status_code,
        }


@dataclass
class AdapterBidder:
    """The slice of a publisher request addressed to one bidder."""

    bidder_code: str
    ad_units: list[SlotRequest] = field(default_factory=list)
    debug: list[DebugRecord] = field(default_factory=list)


class UserSyncStore(Protocol):
    """Cookie/user-id store keyed by bidder family."""

    def get_uid(self, family: str) -> tuple[str, bool, bool]:
        """Return (uid, exists, is_live) for the family."""
        ...


class DictUserSyncStore:
    """In-memory UserSyncStore backed by a plain dict."""

    def __init__(self, uids: Optional[dict[str, str]] = None):
        self._uids = dict(uids or {})

    def get_uid(self, family: str) -> tuple[str, bool, bool]:
        uid = self._uids.get(family, "")
        return uid, bool(uid), bool(uid)


@dataclass
class AdapterRequest:
    """
    Shared request context for all slots of a call.

    `app` holds an OpenRTB app object when the request originates from a
    mobile app; otherwise `domain` and `url` describe the page.
    """

    tid: str = ""
    account_id: str = ""
    app: Optional[dict[str, Any]] = None
    domain: str = ""
    url: str = ""
    device: dict[str, Any] = field(default_factory=dict)
    user: dict[str, Any] = field(default_factory=dict)
    regs: dict[str, Any] = field(default_factory=dict)
    cookie: Optional[UserSyncStore] = None
    timeout_ms: int = 0
    secure: int = 0
    is_debug: bool = False
    test: int = 0

    @property
    def is_app(self) -> bool:
        return self.app is not None
