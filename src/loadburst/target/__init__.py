"""Instrumented target server for loadburst.

Not used by the harness itself. It gives the harness a known endpoint to
hit and exposes request counts, latencies and a health flag while a run is
in progress.
"""

from __future__ import annotations

from loadburst.target.server import create_app, run_server
from loadburst.target.status import ServiceStatus

__all__ = [
    "ServiceStatus",
    "create_app",
    "run_server",
]
