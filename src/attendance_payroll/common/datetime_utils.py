from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterator, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_STRICT_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_strict_iso_date(value: object) -> Optional[date]:
    """Accept a date, or a string that is exactly YYYY-MM-DD; anything else is None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not _STRICT_ISO_DATE.match(text):
        return None
    try:
        return parse_iso_date(text)
    except ValueError:
        return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def iter_dates_desc(start: date, end: date) -> Iterator[date]:
    """Every date from end down to start, inclusive."""
    d = end
    while d >= start:
        yield d
        d -= timedelta(days=1)


def is_weekend(d: date) -> bool:
    return d.weekday() >= 5


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def get_zone(name: Optional[str], fallback: str) -> tzinfo:
    for candidate in (name, fallback):
        if not candidate:
            continue
        try:
            return ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError):
            continue
    return timezone.utc


def to_zone(value: datetime, target: tzinfo, *, naive_as: tzinfo) -> datetime:
    """Convert a timestamp to target; naive values are read in naive_as."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=naive_as)
    return value.astimezone(target)
