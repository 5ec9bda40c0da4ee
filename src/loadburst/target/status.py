"""Process-wide service up/down flag."""

from __future__ import annotations

import threading


class ServiceStatus:
    """Boolean health flag guarded by a lock.

    Starts up. Any request slower than the latency threshold marks the
    service down; nothing marks it up again short of :meth:`reset`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._is_up = True

    @property
    def is_up(self) -> bool:
        with self._lock:
            return self._is_up

    def mark_down(self) -> None:
        with self._lock:
            self._is_up = False

    def reset(self) -> None:
        with self._lock:
            self._is_up = True

    def describe(self) -> str:
        return "Service is UP" if self.is_up else "Service is DOWN"
