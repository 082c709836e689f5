"""Date parsing and period utilities."""

import calendar
from datetime import date, datetime, time, timedelta, timezone
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ledgerbook.domain.errors import ValidationError

PERIODS = ("this-month", "last-month", "this-year", "last-year")


def _relative_day(date_str: str, today: date) -> date | None:
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    return relative_dates.get(date_str)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts absolute dates ("2024-01-15", "January 15, 2024") and the
    relative words "today", "yesterday" and "tomorrow".

    Raises:
        ValidationError: If date string cannot be parsed
    """
    normalized = date_str.strip().lower()
    relative = _relative_day(normalized, date.today())
    if relative is not None:
        return relative

    try:
        return date_parser.parse(normalized).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValidationError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str) -> datetime:
    """Parse a date or date-time string into a naive datetime.

    Values carrying a UTC offset are converted to UTC first. A bare date (or a relative word)
    yields midnight of that day.

    Raises:
        ValidationError: If the string cannot be parsed
    """
    normalized = value.strip().lower()
    relative = _relative_day(normalized, date.today())
    if relative is not None:
        return datetime.combine(relative, time.min)

    try:
        parsed = date_parser.parse(normalized)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValidationError(f"Could not parse date/time '{value}': {e}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.replace(tzinfo=None)


def start_of_day(value: date | datetime) -> datetime:
    """Lower inclusive bound for a date; datetimes pass through unchanged."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def end_of_day(value: date | datetime) -> datetime:
    """Upper inclusive bound for a date; datetimes pass through unchanged."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.max)


def validate_month(month: int) -> int:
    """Return month if it is within 1-12."""
    if not isinstance(month, int) or isinstance(month, bool) or not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month!r}")
    return month


def month_bounds(month: int, year: int) -> tuple[datetime, datetime]:
    """First and last instant of a calendar month, both inclusive."""
    validate_month(month)
    last_day = calendar.monthrange(year, month)[1]
    return (
        datetime(year, month, 1),
        datetime.combine(date(year, month, last_day), time.max),
    )


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, last-month, this-year, last-year

    Returns:
        Tuple of (start_date, end_date); "this" periods end today

    Raises:
        ValidationError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return today.replace(day=1), today

    if period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        return start_date, today.replace(day=1) - timedelta(days=1)

    if period == "this-year":
        return today.replace(month=1, day=1), today

    if period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        return start_date, today.replace(month=1, day=1) - timedelta(days=1)

    raise ValidationError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
