"""Helpers for date and timestamp normalization."""

from datetime import date, datetime, timezone


def coerce_date(value) -> date | None:
    """Normalize stored calendar dates to ``date``.

    Args:
        value: A date, datetime or ISO ``yyyy-MM-dd`` string.

    Returns:
        date | None: Parsed calendar date, or None when value is empty.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def coerce_datetime(value) -> datetime | None:
    """Normalize stored timestamps to timezone-aware ``datetime``.

    Naive values are assumed to be UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


__all__ = ["coerce_date", "coerce_datetime"]
