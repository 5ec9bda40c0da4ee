"""Join barrier the driver blocks on until every worker has finished."""

from __future__ import annotations

import threading

from loadburst._internal.errors import HarnessError


class JoinBarrier:
    """Counter of outstanding workers with a blocking wait.

    The driver calls :meth:`add` once per spawned worker, each worker calls
    :meth:`done` exactly once when it exits, and :meth:`wait` returns once
    the outstanding count reaches zero.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._outstanding = 0

    @property
    def outstanding(self) -> int:
        """Number of registered workers that have not signaled yet."""
        with self._cond:
            return self._outstanding

    def add(self, count: int = 1) -> None:
        """Register ``count`` more workers.

        Raises:
            HarnessError: If ``count`` is negative.
        """
        if count < 0:
            msg = f"JoinBarrier.add count must be >= 0, got: {count}"
            raise HarnessError(msg)
        with self._cond:
            self._outstanding += count

    def done(self) -> None:
        """Signal that one worker has finished.

        Raises:
            HarnessError: If more workers signal than were registered.
        """
        with self._cond:
            if self._outstanding <= 0:
                msg = "JoinBarrier.done called with no outstanding workers"
                raise HarnessError(msg)
            self._outstanding -= 1
            if self._outstanding == 0:
                self._cond.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no workers are outstanding.

        Args:
            timeout: Maximum seconds to wait. None waits forever.

        Returns:
            True if every worker signaled, False if the timeout expired.
        """
        with self._cond:
            return self._cond.wait_for(lambda: self._outstanding == 0, timeout)
