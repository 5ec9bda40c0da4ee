"""Per-worker HTTP client that drains every response it receives."""

from __future__ import annotations

import math
import time

import aiohttp

from loadburst.engine.models import RequestOutcome
from loadburst.workload.config import OCTET_STREAM


def _build_timeout(timeout: float | None) -> aiohttp.ClientTimeout:
    """Translate a timeout in seconds into an aiohttp ClientTimeout.

    None, 0 or infinity disables every aiohttp timeout, including the connect and
    socket-read defaults, so a request waits for as long as the server takes.
    """
    if not timeout or not math.isfinite(timeout):
        return aiohttp.ClientTimeout(
            total=None,
            connect=None,
            sock_connect=None,
            sock_read=None,
        )
    return aiohttp.ClientTimeout(total=timeout)


class HttpClient:
    """Async HTTP client wrapping one ``aiohttp.ClientSession``.

    Each worker owns exactly one client for its whole lifetime. The client
    always sends the same request (method, URL and optional body) and turns
    the result into a :class:`RequestOutcome` instead of raising.

    Attributes:
        url: Target URL.
        method: HTTP method, "GET" or "POST".
    """

    def __init__(
        self,
        url: str,
        *,
        method: str = "GET",
        body: bytes | None = None,
        timeout: float | None = None,
        worker_id: int = 0,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            url: Target URL.
            method: HTTP method.
            body: Payload sent with every request, or None.
            timeout: Total per-request timeout in seconds. None or 0 waits
                indefinitely.
            worker_id: Worker identifier for outcome tagging.
        """
        self.url = url
        self.method = method
        self._body = body
        self._headers = {"Content-Type": OCTET_STREAM} if body is not None else {}
        self._timeout = _build_timeout(timeout)
        self._worker_id = worker_id
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> HttpClient:
        """Open the underlying aiohttp session."""
        self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Close the underlying aiohttp session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def send(self, iteration: int = 0) -> RequestOutcome:
        """Send one request and drain its response.

        The response body is read to the end inside the response context so
        the connection goes back to the session's pool before this returns.

        Args:
            iteration: Iteration index recorded on the outcome.

        Returns:
            RequestOutcome with either a status code or an error message.

        Raises:
            RuntimeError: If the client is used outside of an async context
                manager.
        """
        if self._session is None:
            msg = "HttpClient must be used as an async context manager"
            raise RuntimeError(msg)

        start = time.monotonic()
        try:
            async with self._session.request(
                self.method,
                self.url,
                data=self._body,
                headers=self._headers,
            ) as resp:
                await resp.read()
                status_code = resp.status
        except (aiohttp.ClientError, TimeoutError) as exc:
            return RequestOutcome(
                worker_id=self._worker_id,
                iteration=iteration,
                error=f"{type(exc).__name__}: {exc}",
                latency_ms=(time.monotonic() - start) * 1000,
            )

        return RequestOutcome(
            worker_id=self._worker_id,
            iteration=iteration,
            status_code=status_code,
            latency_ms=(time.monotonic() - start) * 1000,
        )
