"""Driver that fans a workload out over worker threads and joins on them."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from loadburst._internal.errors import HarnessError
from loadburst._internal.logging import get_logger
from loadburst.engine.barrier import JoinBarrier
from loadburst.engine.models import AggregateResult
from loadburst.engine.worker import Worker

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable

    from loadburst.engine.models import RequestOutcome
    from loadburst.workload.config import WorkloadConfig

logger = get_logger("engine.driver")


class Driver:
    """Runs a workload to completion and reports wall-clock timing.

    Spawns ``config.workers`` workers, each assigned
    ``config.requests_per_worker`` requests, and blocks until all of them
    have signaled the join barrier. There is no deadline on the join: with
    an unbounded client timeout and a target that never answers, ``run()``
    never returns.

    Attributes:
        config: The workload being driven.
    """

    def __init__(
        self,
        config: WorkloadConfig,
        *,
        on_outcome: Callable[[RequestOutcome], None] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Initialize the driver.

        Args:
            config: Validated workload configuration.
            on_outcome: Called from worker threads after every request.
            cancel_event: Optional external hook passed to every worker.
                Setting it makes workers stop before their next iteration.
        """
        self.config = config
        self._on_outcome = on_outcome
        self._cancel_event = cancel_event

    def run(self) -> AggregateResult:
        """Spawn all workers, wait for them, and return the aggregate result.

        Returns:
            AggregateResult carrying the configured total and elapsed time.

        Raises:
            HarnessError: If a worker thread cannot be started.
        """
        config = self.config
        # One immutable payload shared by every worker
        body = config.build_body()
        barrier = JoinBarrier()
        workers = [
            Worker(
                worker_id=i,
                config=config,
                barrier=barrier,
                body=body,
                on_outcome=self._on_outcome,
                cancel_event=self._cancel_event,
            )
            for i in range(config.workers)
        ]

        logger.info("Starting load test: %s", config.describe())
        if config.requests_issued < config.total_requests:
            logger.debug(
                "%d requests dropped by partitioning %d over %d workers",
                config.total_requests - config.requests_issued,
                config.total_requests,
                config.workers,
            )

        start_time = time.monotonic()
        barrier.add(len(workers))

        started = 0
        try:
            for worker in workers:
                worker.start()
                started += 1
        except RuntimeError as exc:
            # Release the slots of workers that never started
            for _ in range(len(workers) - started):
                barrier.done()
            barrier.wait()
            msg = f"Failed to start worker {started} of {len(workers)}"
            raise HarnessError(msg) from exc

        barrier.wait()
        end_time = time.monotonic()

        result = AggregateResult(
            total_requests=config.total_requests,
            requests_issued=config.requests_issued,
            duration_seconds=end_time - start_time,
            worker_results=[w.result for w in workers],
        )
        logger.info(
            "Completed %d requests in %.3fs (%d ok, %d failed)",
            result.total_requests,
            result.duration_seconds,
            result.successes,
            result.failures,
        )
        return result


def run_workload(
    config: WorkloadConfig,
    *,
    on_outcome: Callable[[RequestOutcome], None] | None = None,
) -> AggregateResult:
    """Run ``config`` to completion with a fresh :class:`Driver`."""
    return Driver(config, on_outcome=on_outcome).run()
