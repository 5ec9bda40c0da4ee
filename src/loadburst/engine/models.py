"""Result types passed between workers and the driver."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from loadburst.metrics.summary import LatencySummary, summarize_latencies


@dataclass(frozen=True)
class RequestOutcome:
    """Outcome of a single request attempt.

    Exactly one of ``status_code`` and ``error`` is set.

    Attributes:
        worker_id: Worker that issued the request.
        iteration: Zero-based iteration index within the worker.
        status_code: HTTP status if a response was received.
        error: Error description if the request failed.
        latency_ms: Time from send until the body was fully drained.
    """

    worker_id: int
    iteration: int
    status_code: int | None = None
    error: str | None = None
    latency_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class WorkerResult:
    """Per-worker tally, written only by the owning worker thread.

    Attributes:
        worker_id: Worker identifier.
        assigned: Iterations the worker was asked to perform.
        iterations: Iterations actually performed.
        successes: Iterations that received a response (any status).
        failures: Iterations that ended in a network error or timeout.
        status_counts: Number of responses per HTTP status.
        latencies_ms: Latency of every successful iteration.
        started_at: Monotonic time the worker thread began.
        finished_at: Monotonic time the worker thread finished.
    """

    worker_id: int
    assigned: int
    iterations: int = 0
    successes: int = 0
    failures: int = 0
    status_counts: Counter[int] = field(default_factory=Counter)
    latencies_ms: list[float] = field(default_factory=list)
    started_at: float = 0.0
    finished_at: float = 0.0

    @property
    def duration_seconds(self) -> float:
        return max(self.finished_at - self.started_at, 0.0)

    def record(self, outcome: RequestOutcome) -> None:
        """Fold one request outcome into the tally."""
        self.iterations += 1
        if outcome.status_code is not None:
            self.successes += 1
            self.status_counts[outcome.status_code] += 1
            self.latencies_ms.append(outcome.latency_ms)
        else:
            self.failures += 1


@dataclass
class AggregateResult:
    """Summary reported by the driver once every worker has finished.

    ``total_requests`` is the configured total, not a count of delivered
    requests. Use ``requests_issued`` and the per-worker tallies for what
    actually happened.

    Attributes:
        total_requests: Configured total request count.
        requests_issued: Requests per worker times worker count.
        duration_seconds: Wall-clock time from spawn to join.
        worker_results: One tally per worker, ordered by worker id.
    """

    total_requests: int
    requests_issued: int
    duration_seconds: float
    worker_results: list[WorkerResult] = field(default_factory=list)

    @property
    def iterations(self) -> int:
        return sum(r.iterations for r in self.worker_results)

    @property
    def successes(self) -> int:
        return sum(r.successes for r in self.worker_results)

    @property
    def failures(self) -> int:
        return sum(r.failures for r in self.worker_results)

    @property
    def status_counts(self) -> Counter[int]:
        merged: Counter[int] = Counter()
        for r in self.worker_results:
            merged.update(r.status_counts)
        return merged

    @property
    def latency(self) -> LatencySummary:
        samples = [ms for r in self.worker_results for ms in r.latencies_ms]
        return summarize_latencies(samples)

    def summary_line(self) -> str:
        """Return the plain-text completion line."""
        return f"Completed {self.total_requests} requests in {self.duration_seconds:.3f}s"
