"""loadburst: fan a fixed number of HTTP requests out over concurrent workers."""

from __future__ import annotations

from loadburst.engine.barrier import JoinBarrier
from loadburst.engine.driver import Driver, run_workload
from loadburst.engine.models import AggregateResult, RequestOutcome, WorkerResult
from loadburst.engine.worker import Worker
from loadburst.workload.config import WorkloadConfig
from loadburst.workload.profiles import HEAVY, LIGHT, get_profile

__version__ = "0.1.0"

__all__ = [
    "HEAVY",
    "LIGHT",
    "AggregateResult",
    "Driver",
    "JoinBarrier",
    "RequestOutcome",
    "Worker",
    "WorkerResult",
    "WorkloadConfig",
    "get_profile",
    "run_workload",
]
