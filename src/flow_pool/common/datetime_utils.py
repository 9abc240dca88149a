from __future__ import annotations

from datetime import datetime, timedelta


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def validity_window(start: datetime, days: int) -> tuple[datetime, datetime]:
    return start, start + timedelta(days=int(days))
