"""Light profile: many small GETs with a short client timeout.

Start the target server in another terminal, then run this script:

    loadburst serve
    python examples/light_profile.py
"""

from __future__ import annotations

from loadburst import LIGHT, Driver
from loadburst._internal.logging import setup_logging


def main() -> None:
    setup_logging()
    result = Driver(LIGHT).run()
    print(result.summary_line())


if __name__ == "__main__":
    main()
