"""Workload configuration for loadburst.

A :class:`WorkloadConfig` fully describes one run: the target, how many
requests to send, how they are split across workers, and the shape of every
request. Two ready-made profiles, ``light`` and ``heavy``, are provided.
"""

from __future__ import annotations

from loadburst.workload.config import WorkloadConfig, requests_per_worker
from loadburst.workload.profiles import HEAVY, LIGHT, PROFILES, get_profile

__all__ = [
    "HEAVY",
    "LIGHT",
    "PROFILES",
    "WorkloadConfig",
    "get_profile",
    "requests_per_worker",
]
