"""
Platformio exchange adapter.

Sequences params validation, request building, the exchange call and
response mapping for one bidder's slice of a publisher request.

Usage:
    from src.pioadapter import PlatformioAdapter

    adapter = PlatformioAdapter()
    bids = adapter.call(request, bidder, deadline=time.monotonic() + 0.2)
"""

import json
import time
from typing import Optional

from .config import AdapterConfig, get_adapter_config
from .errors import AdapterError, DeadlineExceededError, NoValidImpressionsError
from .logging import ad_unit_context, adapter_logger, call_context
from .models.openrtb import BidRequest
from .models.output_bid import OutputBid
from .models.slot_request import AdapterBidder, AdapterRequest, DebugRecord
from .openrtb import build_request, map_response
from .openrtb.request_builder import ValidatedSlot
from .params import validate_params
from .transport import HttpTransport
from .usersync import UsersyncInfo, build_sync_url

ADAPTER_NAME = "platformio"
FAMILY_NAME = "platformio"
SUPPORTED_MEDIA_TYPES = ("banner",)


class PlatformioAdapter:
    """
    Bid adapter for the Platformio exchange.

    Stateless between calls; the only shared object is the HTTP
    transport, which is safe to use from several threads.
    """

    def __init__(
        self,
        config: Optional[AdapterConfig] = None,
        transport: Optional[HttpTransport] = None,
    ):
        """
        Initialize the adapter.

        Args:
            config: Adapter configuration (global config if not provided)
            transport: HTTP transport (a new one if not provided)
        """
        self.config = config or get_adapter_config()
        self.transport = transport or HttpTransport()
        self.usersync_info = UsersyncInfo(
            url=build_sync_url(
                self.config.usersync_url, self.config.external_url, FAMILY_NAME
            ),
        )

    @property
    def name(self) -> str:
        return ADAPTER_NAME

    @property
    def family_name(self) -> str:
        return FAMILY_NAME

    @property
    def skip_no_cookies(self) -> bool:
        """Platformio bids without a synced user."""
        return False

    def identify(self) -> tuple[str, str]:
        """Return (name, family) used to route and label results."""
        return self.name, self.family_name

    def get_usersync_info(self) -> UsersyncInfo:
        return self.usersync_info

    def sync(self) -> tuple[str, str]:
        """Return (mechanism, url) of the user sync pixel."""
        return self.usersync_info.type, self.usersync_info.url

    def validate_slots(self, bidder: AdapterBidder) -> list[ValidatedSlot]:
        """
        Validate every slot and keep the ones that pass.

        A failure on the first slot examined is raised as-is; failures on
        later slots only drop that slot. Slots skipped for their media
        type are not examined.

        Raises:
            ParamError: If the first slot's params are invalid
            NoValidImpressionsError: If no slot survives
        """
        log = adapter_logger(self.family_name)
        validated: list[ValidatedSlot] = []
        examined = False

        for slot in bidder.ad_units:
            if not any(m in SUPPORTED_MEDIA_TYPES for m in slot.media_types):
                log.debug(
                    "Skipping slot with unsupported media types",
                    ad_unit=slot.code,
                    media_types=slot.media_types,
                )
                continue

            first_examined = not examined
            examined = True

            with ad_unit_context(slot.code):
                result = validate_params(slot.params)
                if result.ok:
                    validated.append((slot, result.params))
                    continue

                if first_examined and not validated:
                    raise result.error
                log.info("Dropping slot with invalid params", error=str(result.error))

        if not validated:
            raise NoValidImpressionsError(f"No valid impressions for {self.family_name}")
        return validated

    def make_request(self, request: AdapterRequest, bidder: AdapterBidder) -> tuple[BidRequest, list[ValidatedSlot]]:
        """Validate slots and build the outbound request without sending it."""
        slots = self.validate_slots(bidder)
        return build_request(request, self.family_name, slots), slots

    def _timeout(self, deadline: Optional[float]) -> float:
        timeout = self.config.timeout_ms / 1000.0
        if deadline is None:
            return timeout
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise DeadlineExceededError(f"Deadline exceeded before calling {self.family_name}")
        return min(timeout, remaining)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json;charset=utf-8",
            "Accept": "application/json",
            "x-openrtb-version": self.config.protocol_version,
        }
        headers.update(self.config.custom_headers)
        return headers

    def call(
        self,
        request: AdapterRequest,
        bidder: AdapterBidder,
        deadline: Optional[float] = None,
    ) -> list[OutputBid]:
        """
        Run one exchange call for a bidder's slots.

        Args:
            request: Shared request context
            bidder: The slots addressed to this adapter
            deadline: Optional time.monotonic() value after which the
                      call is abandoned

        Returns:
            Output bids, possibly empty when the exchange passes

        Raises:
            ParamError: First-slot validation failure
            NoValidImpressionsError: Nothing to send
            TransportError: Connection failure, timeout or bad status
            DecodeError: Unparseable response body
        """
        with call_context(self.family_name, request.tid or None):
            log = adapter_logger(self.family_name)
            ortb_request, slots = self.make_request(request, bidder)
            timeout = self._timeout(deadline)

            try:
                body = json.dumps(ortb_request.to_dict(), allow_nan=False).encode("utf-8")
            except ValueError as e:
                raise AdapterError(f"Error serializing request: {e}") from e

            debug = None
            if request.is_debug:
                debug = DebugRecord(request_uri=self.config.endpoint, request_body=body.decode("utf-8"))
                bidder.debug.append(debug)

            response = self.transport.post(self.config.endpoint, body, self._headers(), timeout)

            if debug is not None:
                debug.status_code = response.status_code
                debug.response_body = response.body.decode("utf-8", errors="replace")

            bids = map_response(
                self.family_name,
                [slot for slot, _ in slots],
                response.status_code,
                response.body,
            )
            log.debug(
                "Exchange call complete",
                impressions=len(ortb_request.imp),
                bids=len(bids),
                status_code=response.status_code,
            )
            return bids
