"""
Date normalization for wire values
"""

from datetime import date, datetime, timezone


def normalize_date(value) -> datetime | None:
    """
    Coerce a date-like wire value into a timezone-aware UTC datetime.

    Accepts ISO-8601 strings (date-only or full datetime, with or without a
    trailing 'Z'), epoch milliseconds, and date/datetime objects. None and
    blank strings stay None. Anything else raises ValueError.
    """
    if value is None:
        return None

    # bool is an int subclass; never a timestamp
    if isinstance(value, bool):
        raise ValueError("Invalid date")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValueError("Invalid date") from None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid date: {value}") from None
        return normalize_date(parsed)

    raise ValueError("Invalid date")
