"""
Structured logging for the Platformio adapter.

Entries are rendered as JSON. Inside an exchange call every entry also
carries the request id and bidder, and while a slot is being processed,
the slot's ad unit code.
"""

import logging
import os
import sys
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

import structlog

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
bidder_var: ContextVar[str] = ContextVar("bidder", default="")
ad_unit_var: ContextVar[str] = ContextVar("ad_unit", default="")

_CALL_CONTEXT = (
    ("request_id", request_id_var),
    ("bidder", bidder_var),
    ("ad_unit", ad_unit_var),
)


def add_call_context(
    logger: structlog.typing.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor adding the current call's request id, bidder and ad unit."""
    for key, var in _CALL_CONTEXT:
        value = var.get()
        if value:
            event_dict.setdefault(key, value)
    event_dict["service"] = "pioadapter"
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """
    Configure structured logging for the adapter.

    Args:
        level: Log level, overridden by $LOG_LEVEL
    """
    level = os.getenv("LOG_LEVEL", level).upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            add_call_context,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def adapter_logger(bidder_code: str) -> structlog.stdlib.BoundLogger:
    """Get logger for bidder-specific adapter events."""
    return get_logger("pioadapter.adapter").bind(bidder=bidder_code)


def http_logger() -> structlog.stdlib.BoundLogger:
    """Get logger for outbound HTTP calls."""
    return get_logger("pioadapter.http")


@contextmanager
def call_context(bidder: str, request_id: str | None = None) -> Iterator[str]:
    """
    Scope log entries to one exchange call and log its outcome.

    Args:
        bidder: Bidder family making the call
        request_id: Caller's transaction id (generated if not provided)

    Yields:
        The request id in effect for the call
    """
    request_id = request_id or f"{int(time.time())}-{uuid.uuid4().hex[:8]}"
    request_token = request_id_var.set(request_id)
    bidder_token = bidder_var.set(bidder)
    log = get_logger("pioadapter.adapter")
    start = time.perf_counter()
    try:
        yield request_id
    except Exception as e:
        log.warning(
            "Exchange call failed",
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
    else:
        log.debug(
            "Exchange call finished",
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
    finally:
        bidder_var.reset(bidder_token)
        request_id_var.reset(request_token)


@contextmanager
def ad_unit_context(code: str) -> Iterator[None]:
    """Tag log entries with the ad unit being processed."""
    token = ad_unit_var.set(code)
    try:
        yield
    finally:
        ad_unit_var.reset(token)


configure_logging()
