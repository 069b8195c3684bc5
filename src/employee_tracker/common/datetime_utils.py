from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime, str, None]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_date(value: DateLike) -> Optional[date]:
    """Coerce a stored or user supplied value into a date.

    Returns None for empty or unparseable input instead of raising.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return parse_iso_date(text[:10])
    except ValueError:
        return None


def to_datetime(value: Union[datetime, str, None]) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError:
        return None


def today_local() -> date:
    return now_local().date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
