from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable

from healthchecker.checks.results import CheckResult
from healthchecker.state import StatusStore

UP = "UP"
DOWN = "DOWN"


def serialize_ts(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def compute_overall_status(results: Iterable[CheckResult]) -> str:
    # Nothing confirmed healthy yet counts as DOWN.
    seen = False
    for res in results:
        seen = True
        if not res.up:
            return DOWN
    return UP if seen else DOWN


def service_entry(res: CheckResult) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "url": res.url,
        "status": UP if res.up else DOWN,
        "code": res.status_code,
        "lastChecked": serialize_ts(res.last_checked),
    }
    if res.error is not None:
        entry["error"] = res.error
    return entry


def build_report(store: StatusStore) -> dict[str, Any]:
    snap = store.snapshot()
    return {
        "status": compute_overall_status(snap),
        "services": [service_entry(res) for res in snap],
    }
