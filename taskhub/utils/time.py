from datetime import date, datetime, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_due_date(value: Union[date, datetime, str, None]) -> Optional[date]:
    """
    Coerce a due date into a calendar date.

    Accepts a date, a datetime (time part dropped) or an ISO string. Strings
    carrying a time part ("2025-01-01T00:00:00Z") keep only the date, which is
    what the dashboard sends back after a round trip.
    Raises ValueError for anything that is not a date.
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
    return date.fromisoformat(text.split("T")[0])
