"""Custom exception hierarchy for loadburst."""

from __future__ import annotations


class LoadBurstError(Exception):
    """Base exception for all loadburst errors.

    All custom exceptions in loadburst inherit from this class, making it
    easy to catch any harness-specific error with a single except clause.
    """


class ConfigError(LoadBurstError):
    """Raised when a workload configuration is invalid.

    Examples:
        - ``workers`` is zero or negative.
        - An environment variable override cannot be parsed.
        - An unknown profile name is requested.
    """


class HarnessError(LoadBurstError):
    """Raised when the driver or its join barrier is misused.

    Examples:
        - A worker signals completion more times than it was registered.
        - A worker is started twice.
    """
