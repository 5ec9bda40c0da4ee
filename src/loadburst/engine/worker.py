"""Worker threads that issue a fixed number of sequential requests."""

from __future__ import annotations

import asyncio
import threading
import time
from typing import TYPE_CHECKING

from loadburst._internal.logging import get_logger
from loadburst.engine.http_client import HttpClient
from loadburst.engine.models import WorkerResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from loadburst.engine.barrier import JoinBarrier
    from loadburst.engine.models import RequestOutcome
    from loadburst.workload.config import WorkloadConfig

logger = get_logger("engine.worker")


def _noop_callback(outcome: RequestOutcome) -> None:
    """Default no-op outcome callback."""


class Worker:
    """One OS thread running its own event loop and its own HTTP client.

    The worker performs ``config.requests_per_worker`` requests one after
    another. A failed request is logged and counted, never retried, and
    never ends the loop early. When the loop exits for any reason the worker
    signals the join barrier exactly once.

    Attributes:
        worker_id: Worker identifier, also used in the thread name.
        result: Tally of what this worker did. Only read it after the
            worker has signaled the barrier.
    """

    def __init__(
        self,
        worker_id: int,
        config: WorkloadConfig,
        barrier: JoinBarrier,
        *,
        body: bytes | None = None,
        on_outcome: Callable[[RequestOutcome], None] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Initialize the worker without starting it.

        Args:
            worker_id: Worker identifier.
            config: Workload this worker takes its share of.
            barrier: Barrier signaled once when the worker exits. The
                caller is responsible for registering the worker on it.
            body: Pre-built payload shared read-only between workers.
                Built from ``config`` when omitted.
            on_outcome: Called from the worker thread after every request.
                Must be thread-safe.
            cancel_event: Optional external hook. When set, the worker stops
                before its next iteration. An in-flight request is not
                interrupted.
        """
        self.worker_id = worker_id
        self.result = WorkerResult(worker_id=worker_id, assigned=config.requests_per_worker)
        self._config = config
        self._barrier = barrier
        self._body = body if body is not None else config.build_body()
        self._on_outcome = on_outcome or _noop_callback
        self._cancel_event = cancel_event
        self._thread = threading.Thread(
            target=self.run,
            name=f"loadburst-worker-{worker_id}",
            daemon=True,
        )

    def start(self) -> None:
        """Start the worker thread."""
        self._thread.start()

    def run(self) -> None:
        """Thread entry point: run the request loop, then signal the barrier."""
        self.result.started_at = time.monotonic()
        try:
            asyncio.run(self._request_loop())
        except Exception:
            logger.exception("Worker %d: request loop aborted", self.worker_id)
        finally:
            self.result.finished_at = time.monotonic()
            self._barrier.done()

    async def _request_loop(self) -> None:
        config = self._config
        async with HttpClient(
            config.url,
            method=config.method,
            body=self._body,
            timeout=config.effective_timeout,
            worker_id=self.worker_id,
        ) as client:
            for iteration in range(self.result.assigned):
                if self._cancel_event is not None and self._cancel_event.is_set():
                    logger.info(
                        "Worker %d: cancelled after %d of %d requests",
                        self.worker_id,
                        iteration,
                        self.result.assigned,
                    )
                    break

                outcome = await client.send(iteration)
                self.result.record(outcome)
                if outcome.ok:
                    logger.info("Response code: %d", outcome.status_code)
                else:
                    logger.warning("Request failed: %s", outcome.error)
                self._on_outcome(outcome)

                await asyncio.sleep(config.delay)

        logger.debug(
            "Worker %d finished: %d ok, %d failed",
            self.worker_id,
            self.result.successes,
            self.result.failures,
        )
