"""Calendar keys used to bucket schedule data by day and by week."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, List


def parse_date(value) -> date:
    """
    Convert a date-like value to a ``date``.

    Accepts ``date``, ``datetime`` (its own calendar fields are used, no
    timezone conversion) and ISO strings (``YYYY-MM-DD``, optionally followed
    by a time part).

    Raises:
        ValueError: If the value is missing or cannot be parsed
    """
    if value is None:
        raise ValueError("Date value is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise ValueError(f"Malformed date: {value!r} (expected YYYY-MM-DD)") from None
    raise ValueError(f"Unsupported date value: {value!r}")


def day_key(value) -> str:
    """Canonical ``YYYY-MM-DD`` key for the day containing ``value``."""
    return parse_date(value).isoformat()


def week_key(value) -> str:
    """Day key of the Monday starting the week that contains ``value``."""
    d = parse_date(value)
    return (d - timedelta(days=d.weekday())).isoformat()


def iter_dates(start, end) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive."""
    current = parse_date(start)
    last = parse_date(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def week_dates(key: str) -> List[date]:
    monday = parse_date(key)
    return [monday + timedelta(days=i) for i in range(7)]
