"""
HTTP transport for exchange calls.

A thin wrapper over requests.Session that turns requests' exceptions
into adapter errors. No retries are performed here.
"""

import time
from dataclasses import dataclass
from typing import Optional

import requests

from .errors import DeadlineExceededError, TransportError
from .logging import http_logger


@dataclass
class HttpResponse:
    status_code: int
    body: bytes


class HttpTransport:
    """Posts JSON bodies to the exchange."""

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize the transport.

        Args:
            session: requests.Session to use (a new one if not provided)
        """
        self.session = session or requests.Session()

    def post(
        self,
        url: str,
        body: bytes,
        headers: dict[str, str],
        timeout: float,
    ) -> HttpResponse:
        """
        POST a request body.

        Args:
            url: Target URL
            body: Serialized request body
            headers: Request headers
            timeout: Seconds before the call is abandoned

        Raises:
            DeadlineExceededError: If the call timed out
            TransportError: On any other connection failure
        """
        log = http_logger().bind(url=url)
        start = time.perf_counter()
        try:
            response = self.session.post(url, data=body, headers=headers, timeout=timeout)
        except requests.Timeout as e:
            log.warning("Exchange call timed out", timeout_s=round(timeout, 3))
            raise DeadlineExceededError(f"Timed out calling {url}: {e}") from e
        except requests.RequestException as e:
            log.warning("Exchange call failed", error=str(e))
            raise TransportError(f"Error calling {url}: {e}") from e

        log.debug(
            "Exchange responded",
            status_code=response.status_code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return HttpResponse(status_code=response.status_code, body=response.content)
