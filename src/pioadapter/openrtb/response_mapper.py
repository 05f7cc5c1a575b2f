"""
Maps the Platformio exchange response back onto the slots that were sent.

A 204 means the exchange passed on every impression. Bids are matched
to slots through bid.impid, which the exchange echoes from imp.id.
"""

import json
from typing import Sequence, Union

from ..errors import DecodeError, TransportError
from ..logging import adapter_logger
from ..models.openrtb import BidResponse
from ..models.output_bid import OutputBid
from ..models.slot_request import SlotRequest

NO_BID_STATUS = 204
OK_STATUS = 200


def decode_response(body: Union[bytes, str]) -> BidResponse:
    """
    Parse a response body into a BidResponse.

    Raises:
        DecodeError: If the body is not JSON in bid response shape
    """
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    try:
        return BidResponse.from_dict(json.loads(body))
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Error parsing response: {e}") from e


def map_response(
    family: str,
    sent_slots: Sequence[SlotRequest],
    status_code: int,
    body: Union[bytes, str],
) -> list[OutputBid]:
    """
    Convert an exchange response into output bids.

    Args:
        family: Adapter family, stamped on every bid
        sent_slots: Slots whose impressions were in the outbound request
        status_code: HTTP status of the exchange response
        body: Raw response body

    Returns:
        One OutputBid per matched bid, in response order; empty on 204

    Raises:
        TransportError: On any status other than 200 or 204
        DecodeError: If a 200 body cannot be parsed
    """
    if status_code == NO_BID_STATUS:
        return []

    if status_code != OK_STATUS:
        text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
        raise TransportError(
            f"HTTP status {status_code}; body: {text}", status_code=status_code
        )

    response = decode_response(body)
    slots_by_code = {slot.code: slot for slot in sent_slots}

    bids = []
    for bid in response.iter_bids():
        slot = slots_by_code.get(bid.impid)
        if slot is None:
            adapter_logger(family).warning(
                "Dropping bid for unknown impression",
                impid=bid.impid,
                bid_id=bid.id,
            )
            continue
        bids.append(
            OutputBid(
                ad_unit_code=slot.code,
                bidder_code=family,
                bid_id=slot.bid_id,
                adm=bid.adm,
                creative_id=bid.crid,
                width=bid.w,
                height=bid.h,
                price=bid.price,
                deal_id=bid.dealid,
                nurl=bid.nurl,
            )
        )
    return bids
