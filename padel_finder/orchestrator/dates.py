"""Date range helpers for orchestration runs."""

from __future__ import annotations

from datetime import date, timedelta


def next_n_days(n: int, start: date | None = None) -> list[str]:
    """*n* consecutive ``YYYY-MM-DD`` keys starting at *start* (local today)."""
    first = start or date.today()
    return [(first + timedelta(days=i)).isoformat() for i in range(n)]
