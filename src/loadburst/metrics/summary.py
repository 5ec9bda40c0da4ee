"""Latency summaries computed from per-worker tallies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True)
class LatencySummary:
    """Latency statistics for successful requests, in milliseconds.

    Attributes:
        count: Number of samples summarized.
        min: Fastest response.
        max: Slowest response.
        avg: Mean response time.
        p50: Median response time.
        p95: 95th percentile response time.
        p99: 99th percentile response time.
    """

    count: int = 0
    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0
    p50: float = 0.0
    p95: float = 0.0
    p99: float = 0.0


def summarize_latencies(latencies: Sequence[float]) -> LatencySummary:
    """Compute latency percentiles from a list of latency values.

    Args:
        latencies: Latency values in milliseconds.

    Returns:
        LatencySummary, all zeros when ``latencies`` is empty.
    """
    if len(latencies) == 0:
        return LatencySummary()

    arr = np.asarray(latencies, dtype=np.float64)
    p50, p95, p99 = np.percentile(arr, [50.0, 95.0, 99.0])

    return LatencySummary(
        count=int(arr.size),
        min=float(np.min(arr)),
        max=float(np.max(arr)),
        avg=float(np.mean(arr)),
        p50=float(p50),
        p95=float(p95),
        p99=float(p99),
    )
