"""Bid returned to the caller."""

from dataclasses import dataclass
from typing import Any


@dataclass
class OutputBid:
    """
    One bid mapped back to the slot it was made on.

    Attributes:
        ad_unit_code: Code of the originating slot
        bidder_code: Always the adapter family name
        bid_id: The slot's caller token, round-tripped
        adm: Creative markup
        creative_id: Exchange creative id
        width: Creative width
        height: Creative height
        price: CPM as sent by the exchange
    """

    ad_unit_code: str
    bidder_code: str
    bid_id: str = ""
    adm: str = ""
    creative_id: str = ""
    width: int = 0
    height: int = 0
    price: float = 0.0
    deal_id: str = ""
    nurl: str = ""
    media_type: str = "banner"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "ad_unit_code": self.ad_unit_code,
            "bidder_code": self.bidder_code,
            "bid_id": self.bid_id,
            "adm": self.adm,
            "creative_id": self.creative_id,
            "width": self.width,
            "height": self.height,
            "price": self.price,
            "deal_id": self.deal_id,
            "nurl": self.nurl,
            "media_type": self.media_type,
        }
