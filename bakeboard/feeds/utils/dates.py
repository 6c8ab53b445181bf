"""Release window arithmetic shared by the feed pipelines."""

import calendar
from datetime import UTC, date, datetime, timedelta

FRIDAY = 4
"""`date.weekday()` value for Friday."""

RELEASE_WEEK_DAYS = 7


def release_friday(today: date) -> date:
    """Return the Friday a dashboard visit on `today` should show.

    Monday to Friday map to the Friday of the same week; Saturday maps to
    yesterday and Sunday to two days back.

    Args:
        today: Reference day.

    Returns:
        The relevant release Friday.
    """
    weekday = today.weekday()
    if weekday == 5:
        return today - timedelta(days=1)
    if weekday == 6:
        return today - timedelta(days=2)
    return today + timedelta(days=FRIDAY - weekday)


def release_week(today: date) -> tuple[date, date]:
    """Return the 7-day window ending on the release Friday.

    Args:
        today: Reference day.

    Returns:
        Tuple (week_start, friday), both inclusive.
    """
    friday = release_friday(today)
    return friday - timedelta(days=RELEASE_WEEK_DAYS - 1), friday


def utc_day_bounds(now: datetime | None = None) -> tuple[int, int]:
    """Return [start, end) unix timestamps of the current UTC day.

    Args:
        now: Reference instant (defaults to the current time).

    Returns:
        Tuple (start_of_day, end_of_day) in seconds.
    """
    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    day = now.astimezone(UTC).date()
    start = int(datetime(day.year, day.month, day.day, tzinfo=UTC).timestamp())
    return start, start + 86400


def months_before(day: date, months: int) -> date:
    """Shift a date back by whole calendar months, clamping the day.

    Args:
        day: Reference day.
        months: Number of months to go back.

    Returns:
        Shifted date (e.g. Aug 31 minus 6 months is Feb 28/29).
    """
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def parse_iso_date(value: str | None) -> date | None:
    """Parse the date part of an ISO string, None when absent or invalid."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def timestamp_to_iso_date(timestamp: int | None) -> str:
    """Convert a unix timestamp to an ISO date string ("" when absent)."""
    if timestamp is None:
        return ""
    return datetime.fromtimestamp(timestamp, UTC).date().isoformat()
