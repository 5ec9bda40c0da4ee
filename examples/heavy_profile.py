"""Heavy profile: 10 MiB POSTs that wait indefinitely for a response.

The client timeout is unbounded on purpose. If the target accepts
connections but never answers, this script never finishes.

    loadburst serve
    python examples/heavy_profile.py
"""

from __future__ import annotations

import dataclasses

from loadburst import HEAVY, Driver
from loadburst._internal.logging import setup_logging


def main() -> None:
    setup_logging()
    # Scaled down from the full profile so it fits on a laptop
    config = dataclasses.replace(HEAVY, total_requests=5_000, workers=50)
    result = Driver(config).run()
    print(result.summary_line())


if __name__ == "__main__":
    main()
