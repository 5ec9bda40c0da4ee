"""Named workload profiles."""

from __future__ import annotations

from loadburst._internal.errors import ConfigError
from loadburst.workload.config import DEFAULT_URL, WorkloadConfig

HEAVY_BODY_SIZE = 10 * 1024 * 1024

# Small GETs with a short timeout and a longer pause between requests.
LIGHT = WorkloadConfig(
    url=DEFAULT_URL,
    total_requests=50_000,
    workers=200,
    body_size=0,
    delay=0.1,
    timeout=1.0,
    profile="light",
)

# Large POSTs that wait indefinitely for a response. A target that accepts
# connections but never answers hangs the whole run.
HEAVY = WorkloadConfig(
    url=DEFAULT_URL,
    total_requests=100_000,
    workers=500,
    body_size=HEAVY_BODY_SIZE,
    delay=0.05,
    timeout=None,
    profile="heavy",
)

PROFILES: dict[str, WorkloadConfig] = {
    LIGHT.profile: LIGHT,
    HEAVY.profile: HEAVY,
}


def get_profile(name: str) -> WorkloadConfig:
    """Look up a profile by name.

    Args:
        name: Profile name, case-insensitive ("light" or "heavy").

    Returns:
        The profile's WorkloadConfig.

    Raises:
        ConfigError: If no profile has that name.
    """
    try:
        return PROFILES[name.lower()]
    except KeyError:
        choices = ", ".join(sorted(PROFILES))
        msg = f"Unknown profile: {name!r}. Choose from: {choices}"
        raise ConfigError(msg) from None
