"""Custom workload with a per-request callback.

    python examples/custom_workload.py
"""

from __future__ import annotations

import threading
from collections import Counter

from loadburst import RequestOutcome, WorkloadConfig, run_workload


def main() -> None:
    errors: Counter[str] = Counter()
    lock = threading.Lock()

    def on_outcome(outcome: RequestOutcome) -> None:
        if outcome.error is not None:
            with lock:
                errors[outcome.error.split(":", 1)[0]] += 1

    config = WorkloadConfig(
        url="http://localhost:8081/",
        total_requests=1_000,
        workers=20,
        body_size=4096,
        delay=0.01,
        timeout=5.0,
    )
    result = run_workload(config, on_outcome=on_outcome)
    print(result.summary_line())
    for name, count in errors.most_common():
        print(f"  {name}: {count}")


if __name__ == "__main__":
    main()
