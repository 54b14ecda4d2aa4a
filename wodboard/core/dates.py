"""Calendar helpers for the app's fixed operating timezone.

Everything downstream compares plain ``datetime.date`` values; the only place
a time-of-day is involved is ``today_in_tz``.
"""

import calendar
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo


def today_in_tz(tz_name: str) -> date:
    """Return today's calendar date in the given IANA timezone.

    Parameters
    ----------
    tz_name : str
        IANA timezone name, e.g. ``"Asia/Dubai"``

    Returns
    -------
    date
        Today's date as seen from that timezone
    """
    return datetime.now(ZoneInfo(tz_name)).date()


def parse_iso_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string."""
    return date.fromisoformat(value)


def iso_weekday(day: date) -> int:
    """ISO weekday number, 1=Monday ... 7=Sunday."""
    return day.isoweekday()


def is_weekend(day: date) -> bool:
    return day.isoweekday() >= 6


def shift_date(day: date, days: int) -> date:
    return day + timedelta(days=days)


def week_monday(day: date) -> date:
    """Monday of the (Monday-start) week containing ``day``."""
    return day - timedelta(days=day.weekday())


def week_friday(monday: date) -> date:
    """Friday of the week starting on ``monday``."""
    return monday + timedelta(days=4)


def month_key(day: date) -> str:
    """``YYYY-MM`` key of the month containing ``day``."""
    return f"{day.year:04d}-{day.month:02d}"


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing ``day`` (both inclusive)."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def format_week_label(monday: date) -> str:
    """Readable Monday-Friday label like ``"Mar 3-7"`` or ``"Mar 31-Apr 4"``."""
    friday = week_friday(monday)
    start = f"{monday.strftime('%b')} {monday.day}"
    if friday.month == monday.month:
        return f"{start}-{friday.day}"
    return f"{start}-{friday.strftime('%b')} {friday.day}"
