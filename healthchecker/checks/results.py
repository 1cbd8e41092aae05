from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CheckResult:
    url: str
    up: bool
    status_code: int = 0
    error: str | None = None
    last_checked: datetime = field(default_factory=utcnow)
