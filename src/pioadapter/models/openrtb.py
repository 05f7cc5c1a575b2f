"""
OpenRTB 2.5 wire models for the Platformio exchange.

Only the fields the adapter sends or reads are modelled. Empty optional
fields are omitted from to_dict() output.

Reference: https://github.com/InteractiveAdvertisingBureau/openrtb2.x
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .slot_request import Format


@dataclass
class Banner:
    """Banner object of an impression."""

    w: int
    h: int
    format: list[Format] = field(default_factory=list)
    topframe: int = 0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"w": self.w, "h": self.h}
        if self.format:
            result["format"] = [f.to_dict() for f in self.format]
        if self.topframe:
            result["topframe"] = self.topframe
        return result


@dataclass
class Imp:
    """
    Impression object.

    `id` carries the slot code so the exchange can echo it back as
    bid.impid; `tagid` carries the Platformio placement id.
    """

    id: str
    tagid: str
    banner: Banner
    instl: int = 0
    secure: int = 0
    bidfloor: Optional[float] = None
    bidfloorcur: str = "USD"

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "tagid": self.tagid,
            "banner": self.banner.to_dict(),
        }
        if self.instl:
            result["instl"] = self.instl
        if self.secure:
            result["secure"] = self.secure
        if self.bidfloor is not None:
            result["bidfloor"] = self.bidfloor
            result["bidfloorcur"] = self.bidfloorcur
        return result


@dataclass
class Publisher:
    id: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id}


@dataclass
class Site:
    """Site object, sent for web traffic only."""

    id: str
    publisher: Publisher
    domain: str = ""
    page: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "publisher": self.publisher.to_dict(),
        }
        if self.domain:
            result["domain"] = self.domain
        if self.page:
            result["page"] = self.page
        return result


@dataclass
class BidRequest:
    """
    Outbound bid request.

    Exactly one of `site` and `app` is set. `app` is passed through from
    the inbound request as-is.
    """

    id: str
    imp: list[Imp]
    site: Optional[Site] = None
    app: Optional[dict[str, Any]] = None
    device: dict[str, Any] = field(default_factory=dict)
    user: dict[str, Any] = field(default_factory=dict)
    regs: dict[str, Any] = field(default_factory=dict)
    source: dict[str, Any] = field(default_factory=dict)
    at: int = 1
    tmax: int = 0
    test: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-ready wire shape."""
        result: dict[str, Any] = {
            "id": self.id,
            "imp": [imp.to_dict() for imp in self.imp],
            "at": self.at,
        }
        if self.app is not None:
            result["app"] = dict(self.app)
        elif self.site is not None:
            result["site"] = self.site.to_dict()
        if self.device:
            result["device"] = dict(self.device)
        if self.user:
            result["user"] = dict(self.user)
        if self.regs:
            result["regs"] = dict(self.regs)
        if self.source:
            result["source"] = dict(self.source)
        if self.tmax:
            result["tmax"] = self.tmax
        if self.test:
            result["test"] = self.test
        return result


@dataclass
class Bid:
    """A single bid from a seatbid."""

    impid: str
    price: float
    id: str = ""
    adm: str = ""
    crid: str = ""
    w: int = 0
    h: int = 0
    dealid: str = ""
    nurl: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bid":
        """
        Create from the wire shape.

        Raises:
            ValueError, TypeError: If the bid is not an object or a
                numeric field is not a number
        """
        if not isinstance(data, dict):
            raise ValueError(f"bid must be an object, got {type(data).__name__}")
        return cls(
            impid=str(data.get("impid", "")),
            price=float(data.get("price", 0.0)),
            id=str(data.get("id", "")),
            adm=data.get("adm", "") or "",
            crid=str(data.get("crid", "") or ""),
            w=int(data.get("w") or 0),
            h=int(data.get("h") or 0),
            dealid=str(data.get("dealid", "") or ""),
            nurl=data.get("nurl", "") or "",
        )


@dataclass
class SeatBid:
    bid: list[Bid] = field(default_factory=list)
    seat: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeatBid":
        if not isinstance(data, dict):
            raise ValueError(f"seatbid must be an object, got {type(data).__name__}")
        bids = data.get("bid") or []
        if not isinstance(bids, list):
            raise ValueError("seatbid.bid must be an array")
        return cls(
            bid=[Bid.from_dict(b) for b in bids],
            seat=str(data.get("seat", "") or ""),
        )


@dataclass
class BidResponse:
    """Exchange bid response."""

    id: str = ""
    seatbid: list[SeatBid] = field(default_factory=list)
    cur: str = "USD"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BidResponse":
        if not isinstance(data, dict):
            raise ValueError(
                f"bid response must be an object, got {type(data).__name__}"
            )
        seatbids = data.get("seatbid") or []
        if not isinstance(seatbids, list):
            raise ValueError("seatbid must be an array")
        return cls(
            id=str(data.get("id", "") or ""),
            seatbid=[SeatBid.from_dict(sb) for sb in seatbids],
            cur=data.get("cur", "USD") or "USD",
        )

    def iter_bids(self):
        """Yield bids in response order across seatbids."""
        for seatbid in self.seatbid:
            yield from seatbid.bid
