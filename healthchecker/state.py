from __future__ import annotations

import threading

from healthchecker.checks.results import CheckResult


class StatusStore:
    """Latest check result per URL, shared by the scheduler and the server.

    Results are immutable and swapped in whole under the lock, so a snapshot
    never contains a partially updated entry.
    """

    def __init__(self) -> None:
        self._results: dict[str, CheckResult] = {}
        self._lock = threading.Lock()

    def put(self, result: CheckResult) -> None:
        with self._lock:
            self._results[result.url] = result

    def get(self, url: str) -> CheckResult | None:
        with self._lock:
            return self._results.get(url)

    def snapshot(self) -> list[CheckResult]:
        with self._lock:
            return list(self._results.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)
