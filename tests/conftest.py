"""Shared fixtures: sample requests and a stub Platformio exchange."""

import json
import time
from http.server import BaseHTTPRequestHandler, HTTPServer
from threading import Thread
from typing import Any, Optional

import pytest

from src.pioadapter.adapter import PlatformioAdapter
from src.pioadapter.config import AdapterConfig
from src.pioadapter.models import (
    AdapterBidder,
    AdapterRequest,
    DictUserSyncStore,
    Format,
    SlotRequest,
)


class StubExchange:
    """
    Mock OpenRTB endpoint of Platformio.

    Bids on impressions whose tagid is in `tags_to_bid` and answers 204
    when there is nothing to bid on.
    """

    def __init__(self):
        self.url = ""
        self.tags_to_bid: set[str] = set()
        self.status_override: Optional[int] = None
        self.body_override: bytes = b""
        self.delay: float = 0.0
        self.requests: list[dict[str, Any]] = []
        self.headers: list[dict[str, str]] = []

    @property
    def last_request(self) -> dict[str, Any]:
        return self.requests[-1]

    def bid_on(self, *tags: str) -> "StubExchange":
        self.tags_to_bid = set(tags)
        return self

    def respond(self, bid_request: dict[str, Any]) -> tuple[int, bytes]:
        if self.delay:
            time.sleep(self.delay)
        if self.status_override is not None:
            return self.status_override, self.body_override

        bids = [
            sample_bid(imp["id"])
            for imp in bid_request.get("imp", [])
            if imp.get("tagid") in self.tags_to_bid
        ]
        if not bids:
            return 204, b""
        return 200, json.dumps({"id": bid_request.get("id", ""), "seatbid": [{"bid": bids}]}).encode()


def sample_bid(impid: str) -> dict[str, Any]:
    return {
        "id": "Bid-123",
        "impid": impid,
        "price": 2.1,
        "adm": "<div>This is an Ad</div>",
        "crid": "Cr-123",
        "w": 728,
        "h": 90,
    }


def _make_handler(exchange: StubExchange):
    class ExchangeHandler(BaseHTTPRequestHandler):
        def do_POST(self):
            length = int(self.headers.get("Content-Length", 0))
            body = self.rfile.read(length)
            try:
                bid_request = json.loads(body.decode("utf-8"))
            except ValueError as e:
                self.send_response(500)
                self.end_headers()
                self.wfile.write(str(e).encode())
                return

            exchange.requests.append(bid_request)
            exchange.headers.append(dict(self.headers))
            status, payload = exchange.respond(bid_request)

            self.send_response(status)
            if payload:
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            if payload:
                self.wfile.write(payload)

        def log_message(self, format, *args):
            """Silence HTTP server logs during tests."""
            pass

    return ExchangeHandler


@pytest.fixture
def exchange():
    """Start a local stub exchange."""
    stub = StubExchange()
    server = HTTPServer(("127.0.0.1", 0), _make_handler(stub))
    thread = Thread(target=server.serve_forever, daemon=True)
    thread.start()

    stub.url = f"http://127.0.0.1:{server.server_address[1]}/bid"
    yield stub

    server.shutdown()
    server.server_close()


def make_adapter(endpoint: str = "http://localhost/bid", usersync_url: str = "usersync") -> PlatformioAdapter:
    return PlatformioAdapter(
        AdapterConfig(
            endpoint=endpoint,
            usersync_url=usersync_url,
            external_url="http://localhost",
            timeout_ms=2000,
        )
    )


def sample_params(tag_id: int = 1001) -> dict[str, Any]:
    return {"placementId": tag_id, "pubId": 29521, "siteId": 11111, "size": "300X250"}


def sample_request(number_of_impressions: int = 1) -> tuple[AdapterRequest, AdapterBidder]:
    """Produce a publisher request with one slot per impression."""
    request = AdapterRequest(
        tid="tid-abc",
        account_id="1",
        domain="news.pub",
        url="http://news.pub/topnews",
        device={"ua": "Mozilla/5.0", "ip": "192.0.2.1"},
        cookie=DictUserSyncStore({"platformio": "platformioUser123"}),
        timeout_ms=500,
    )
    bidder = AdapterBidder(
        bidder_code="platformio",
        ad_units=[
            SlotRequest(
                code=f"div-adunit-{i + 1}",
                bid_id=f"Bid-{i + 1}",
                params=sample_params(1001 + i),
                sizes=[Format(w=10, h=12)],
            )
            for i in range(number_of_impressions)
        ],
    )
    return request, bidder


@pytest.fixture
def adapter(exchange):
    """Adapter pointed at the stub exchange."""
    return make_adapter(endpoint=exchange.url)


@pytest.fixture
def sample():
    """Factory for (AdapterRequest, AdapterBidder) pairs."""
    return sample_request


@pytest.fixture
def adapter_factory():
    """Factory for adapters with custom endpoint or usersync template."""
    return make_adapter
