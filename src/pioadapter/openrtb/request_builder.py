"""
Builds the outbound OpenRTB request for the Platformio exchange.

All slots of one call go into a single request, one impression per
slot in the order they were validated.
"""

from typing import Sequence

from ..models.openrtb import Banner, BidRequest, Imp, Publisher, Site
from ..models.slot_request import AdapterRequest, SlotRequest
from ..models.validated_params import ValidatedParams

ValidatedSlot = tuple[SlotRequest, ValidatedParams]


def build_imp(slot: SlotRequest, params: ValidatedParams, secure: int = 0) -> Imp:
    """Build the impression for one validated slot."""
    return Imp(
        id=slot.code,
        tagid=params.placement_id,
        banner=Banner(
            w=params.width,
            h=params.height,
            format=list(slot.sizes),
            topframe=slot.topframe,
        ),
        instl=slot.instl,
        secure=secure,
        bidfloor=params.bid_floor,
    )


def build_user(request: AdapterRequest, family: str) -> dict:
    """Copy the inbound user object and attach the synced buyer uid."""
    user = dict(request.user)
    if request.cookie is not None:
        uid, exists, _ = request.cookie.get_uid(family)
        if exists:
            user["buyeruid"] = uid
    return user


def build_request(
    request: AdapterRequest,
    family: str,
    slots: Sequence[ValidatedSlot],
) -> BidRequest:
    """
    Assemble one bid request from validated slots.

    Args:
        request: Shared request context
        family: Bidder family, used for the user sync lookup
        slots: (slot, params) pairs; must not be empty

    Returns:
        BidRequest with an app block for app traffic, else a site block
        built from the first slot's publisher and site ids
    """
    if not slots:
        raise ValueError("build_request needs at least one validated slot")

    imps = [build_imp(slot, params, request.secure) for slot, params in slots]

    site = None
    app = None
    if request.is_app:
        app = dict(request.app)
    else:
        # All slots are assumed to share one publisher/site
        first = slots[0][1]
        site = Site(
            id=first.site_id,
            publisher=Publisher(id=first.publisher_id),
            domain=request.domain,
            page=request.url,
        )

    return BidRequest(
        id=request.tid,
        imp=imps,
        site=site,
        app=app,
        device=dict(request.device),
        user=build_user(request, family),
        regs=dict(request.regs),
        source={"tid": request.tid, "fd": 1} if request.tid else {},
        tmax=request.timeout_ms,
        test=request.test,
    )
