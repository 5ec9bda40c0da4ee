"""Workload configuration and request partitioning."""

from __future__ import annotations

import math
from dataclasses import dataclass

from loadburst._internal.errors import ConfigError

FILLER_BYTE = b"A"
OCTET_STREAM = "application/octet-stream"
DEFAULT_URL = "http://localhost:8081/"


def requests_per_worker(total_requests: int, workers: int) -> int:
    """Split a total request count evenly across workers.

    Uses floor division. When ``workers`` does not divide ``total_requests``
    the remainder is dropped, so fewer than ``total_requests`` requests are
    issued overall.

    Args:
        total_requests: Total requests asked for.
        workers: Number of concurrent workers (must be positive).

    Returns:
        The number of sequential requests each worker performs.

    Raises:
        ConfigError: If ``workers`` is not positive or the total is negative.
    """
    if workers <= 0:
        msg = f"workers must be > 0, got: {workers}"
        raise ConfigError(msg)
    if total_requests < 0:
        msg = f"total_requests must be >= 0, got: {total_requests}"
        raise ConfigError(msg)
    return total_requests // workers


@dataclass(frozen=True)
class WorkloadConfig:
    """Fully resolved description of one harness run.

    Attributes:
        url: Target endpoint every request is sent to.
        total_requests: Requested total across all workers.
        workers: Number of concurrent workers.
        body_size: Payload size in bytes. 0 means a GET with no body;
            anything larger sends a POST with an octet-stream body.
        delay: Seconds to sleep after every iteration.
        timeout: Per-request client timeout in seconds. None, 0 or infinity
            means wait indefinitely.
        profile: Display name of the profile this config came from.
    """

    url: str = DEFAULT_URL
    total_requests: int = 0
    workers: int = 1
    body_size: int = 0
    delay: float = 0.0
    timeout: float | None = None
    profile: str = "custom"

    def __post_init__(self) -> None:
        if not self.url:
            msg = "url must not be empty"
            raise ConfigError(msg)
        # Validates workers and total_requests
        requests_per_worker(self.total_requests, self.workers)
        if self.body_size < 0:
            msg = f"body_size must be >= 0, got: {self.body_size}"
            raise ConfigError(msg)
        if not math.isfinite(self.delay) or self.delay < 0:
            msg = f"delay must be a finite number >= 0, got: {self.delay}"
            raise ConfigError(msg)
        if self.timeout is not None and (math.isnan(self.timeout) or self.timeout < 0):
            msg = f"timeout must be >= 0, got: {self.timeout}"
            raise ConfigError(msg)

    @property
    def requests_per_worker(self) -> int:
        """Sequential requests assigned to each worker."""
        return requests_per_worker(self.total_requests, self.workers)

    @property
    def requests_issued(self) -> int:
        """Requests actually attempted across all workers."""
        return self.requests_per_worker * self.workers

    @property
    def method(self) -> str:
        return "POST" if self.body_size > 0 else "GET"

    @property
    def effective_timeout(self) -> float | None:
        """Timeout to hand to the HTTP client, or None for unbounded."""
        if not self.timeout or math.isinf(self.timeout):
            return None
        return self.timeout

    def build_body(self) -> bytes | None:
        """Build the request payload.

        Returns:
            ``body_size`` repetitions of the filler byte, or None for
            GET-style workloads.
        """
        if self.body_size == 0:
            return None
        return FILLER_BYTE * self.body_size

    def describe(self) -> str:
        """Return a one-line human-readable description."""
        timeout = (
            "unbounded" if self.effective_timeout is None else f"{self.effective_timeout}s"
        )
        return (
            f"{self.profile}: {self.method} {self.url}, "
            f"{self.workers} workers x {self.requests_per_worker} requests, "
            f"body={self.body_size}B, delay={self.delay}s, timeout={timeout}"
        )
