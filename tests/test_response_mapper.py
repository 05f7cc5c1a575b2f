"""Tests for mapping exchange responses to output bids."""

import json

import pytest

from src.pioadapter.errors import DecodeError, TransportError
from src.pioadapter.models import SlotRequest
from src.pioadapter.openrtb import decode_response, map_response


def _bid(impid, price=2.1, **extra):
    return {"id": "Bid-123", "impid": impid, "price": price, "adm": "<div>ad</div>",
            "crid": "Cr-123", "w": 728, "h": 90, **extra}


def _body(*seatbids):
    return json.dumps({"id": "resp-1", "seatbid": [{"bid": list(bids)} for bids in seatbids]}).encode()


class TestResponseMapper:
    """Test suite for map_response."""

    @pytest.fixture
    def slots(self):
        return [
            SlotRequest(code="div-adunit-1", bid_id="Bid-1"),
            SlotRequest(code="div-adunit-2", bid_id="Bid-2"),
        ]

    def test_no_bid_status(self, slots):
        """Test 204 is an empty result, not an error."""
        assert map_response("platformio", slots, 204, b"") == []

    def test_partial_bids(self, slots):
        """Test only slots with bids produce output."""
        bids = map_response("platformio", slots, 200, _body([_bid("div-adunit-2")]))

        assert len(bids) == 1
        assert bids[0].ad_unit_code == "div-adunit-2"
        assert bids[0].bid_id == "Bid-2"
        assert bids[0].bidder_code == "platformio"

    def test_bid_fields_copied(self, slots):
        """Test bid values are copied without adjustment."""
        bid = map_response("platformio", slots, 200, _body([_bid("div-adunit-1", dealid="deal-7")]))[0]

        assert bid.adm == "<div>ad</div>"
        assert bid.creative_id == "Cr-123"
        assert bid.width == 728
        assert bid.height == 90
        assert bid.price == 2.1
        assert bid.deal_id == "deal-7"

    def test_response_order_across_seatbids(self, slots):
        """Test output follows response order, not slot order."""
        body = _body([_bid("div-adunit-2")], [_bid("div-adunit-1")])

        bids = map_response("platformio", slots, 200, body)

        assert [b.ad_unit_code for b in bids] == ["div-adunit-2", "div-adunit-1"]

    def test_unknown_impid_dropped(self, slots):
        """Test bids for impressions we did not send are dropped."""
        bids = map_response("platformio", slots, 200, _body([_bid("nope"), _bid("div-adunit-1")]))

        assert [b.ad_unit_code for b in bids] == ["div-adunit-1"]

    def test_empty_seatbid(self, slots):
        """Test a 200 with no seatbids yields no bids."""
        assert map_response("platformio", slots, 200, b'{"id": "x"}') == []

    def test_unexpected_status(self, slots):
        """Test a non-200/204 status is a transport error."""
        with pytest.raises(TransportError) as exc_info:
            map_response("platformio", slots, 500, b"boom")

        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "HTTP status 500; body: boom"

    @pytest.mark.parametrize(
        "body",
        [b"not json", b"[]", b'{"seatbid": {"bid": []}}', b'{"seatbid": [{"bid": [{"impid": "a", "price": "x"}]}]}'],
    )
    def test_decode_failure(self, slots, body):
        """Test malformed bodies raise DecodeError."""
        with pytest.raises(DecodeError):
            map_response("platformio", slots, 200, body)


class TestDecodeResponse:
    """Test suite for decode_response."""

    def test_decode_str_body(self):
        response = decode_response(_body([_bid("a"), _bid("b")]).decode())

        assert response.id == "resp-1"
        assert [b.impid for b in response.iter_bids()] == ["a", "b"]
