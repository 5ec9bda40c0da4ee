"""Configuration loading for loadburst."""

from __future__ import annotations

import dataclasses
import os
from typing import TYPE_CHECKING

from loadburst._internal.errors import ConfigError
from loadburst.workload.profiles import get_profile

if TYPE_CHECKING:
    from collections.abc import Mapping

    from loadburst.workload.config import WorkloadConfig


def _parse_int(env: Mapping[str, str], name: str) -> int | None:
    raw = env.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got: {raw!r}"
        raise ConfigError(msg) from None


def _parse_float(env: Mapping[str, str], name: str) -> float | None:
    raw = env.get(name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        msg = f"{name} must be a number, got: {raw!r}"
        raise ConfigError(msg) from None


def load_config(
    profile: str = "light",
    env: Mapping[str, str] | None = None,
) -> WorkloadConfig:
    """Load a workload configuration from a profile and the environment.

    Environment variables override the named profile's values:
        LOADBURST_URL: Target URL.
        LOADBURST_TOTAL_REQUESTS: Total requests across all workers.
        LOADBURST_WORKERS: Number of concurrent workers (must be >= 1).
        LOADBURST_DELAY: Seconds to sleep after each request.
        LOADBURST_BODY_SIZE: Payload size in bytes (0 sends GET).
        LOADBURST_TIMEOUT: Client timeout in seconds (0 means unbounded).

    Args:
        profile: Base profile name ("light" or "heavy").
        env: Mapping to read overrides from. Defaults to ``os.environ``.

    Returns:
        Validated WorkloadConfig instance.

    Raises:
        ConfigError: If the profile is unknown or an override is invalid.
    """
    env = os.environ if env is None else env
    base = get_profile(profile)

    overrides: dict[str, object] = {}
    url = env.get("LOADBURST_URL")
    if url is not None:
        overrides["url"] = url

    total = _parse_int(env, "LOADBURST_TOTAL_REQUESTS")
    if total is not None:
        overrides["total_requests"] = total

    workers = _parse_int(env, "LOADBURST_WORKERS")
    if workers is not None:
        if workers < 1:
            msg = f"LOADBURST_WORKERS must be >= 1, got: {workers}"
            raise ConfigError(msg)
        overrides["workers"] = workers

    body_size = _parse_int(env, "LOADBURST_BODY_SIZE")
    if body_size is not None:
        overrides["body_size"] = body_size

    delay = _parse_float(env, "LOADBURST_DELAY")
    if delay is not None:
        overrides["delay"] = delay

    timeout = _parse_float(env, "LOADBURST_TIMEOUT")
    if timeout is not None:
        overrides["timeout"] = timeout

    # replace() re-runs WorkloadConfig validation
    return dataclasses.replace(base, **overrides)  # type: ignore[arg-type]
