"""Date windows for standings and the completed-period rules.

Standings for a period that is still running change as scores arrive, so
profile statistics only summarise completed days, weeks and months.
"""

from datetime import date, timedelta
from typing import Iterable

from wodboard.core.dates import (
    format_week_label,
    is_weekend,
    month_bounds,
    month_key,
    week_friday,
    week_monday,
)
from wodboard.scoring.exceptions import InvalidPeriodError
from wodboard.scoring.schemas import DateWindow

PERIODS = (
    "today",
    "this_week",
    "last_week",
    "this_month",
    "last_month",
    "this_year",
    "last_year",
    "custom",
)


def week_window(day: date) -> DateWindow:
    """Monday-Friday window of the week containing ``day``.

    Parameters
    ----------
    day : date
        Any date within the week; Saturday and Sunday belong to the week
        that started the Monday before

    Returns
    -------
    DateWindow
        Window from Monday to Friday (inclusive), labelled like ``"Mar 3-7"``
    """
    monday = week_monday(day)
    return DateWindow(start=monday, end=week_friday(monday), label=format_week_label(monday))


def month_window(day: date) -> DateWindow:
    """Calendar month containing ``day``, labelled ``YYYY-MM``."""
    start, end = month_bounds(day)
    return DateWindow(start=start, end=end, label=month_key(day))


def days_in(window: DateWindow) -> list[date]:
    """Every date of a window, in order."""
    return [
        window.start + timedelta(days=offset)
        for offset in range((window.end - window.start).days + 1)
    ]


def completed_days(today: date, dates: Iterable[date]) -> list[date]:
    """Distinct dates strictly before today, ascending."""
    return sorted({day for day in dates if day < today})


def completed_weeks(today: date, dates: Iterable[date]) -> list[DateWindow]:
    """Weeks with weekday activity whose Friday is strictly before today.

    Parameters
    ----------
    today : date
        Today in the operating timezone
    dates : Iterable[date]
        Dates with activity; weekend dates are ignored

    Returns
    -------
    list[DateWindow]
        Monday-Friday windows, ascending
    """
    mondays = {week_monday(day) for day in dates if not is_weekend(day)}
    return [
        week_window(monday)
        for monday in sorted(mondays)
        if week_friday(monday) < today
    ]


def completed_months(today: date, dates: Iterable[date]) -> list[DateWindow]:
    """Months with activity strictly before the month containing today."""
    current = today.replace(day=1)
    firsts = {day.replace(day=1) for day in dates}
    return [month_window(first) for first in sorted(firsts) if first < current]


def get_period_window(
    period: str,
    today: date,
    custom_start: date | None = None,
    custom_end: date | None = None,
) -> DateWindow:
    """Get the date window for a named leaderboard period.

    Parameters
    ----------
    period : str
        One of 'today', 'this_week', 'last_week', 'this_month', 'last_month',
        'this_year', 'last_year', 'custom'
    today : date
        Today in the operating timezone
    custom_start : date | None
        First day for custom period (required if period='custom')
    custom_end : date | None
        Last day for custom period (required if period='custom')

    Returns
    -------
    DateWindow
        Inclusive window; weeks run Monday to Friday

    Raises
    ------
    InvalidPeriodError
        If period is 'custom' but a bound is missing or reversed,
        or if period is not one of the valid options
    """
    if period == "today":
        return DateWindow(start=today, end=today, label=today.isoformat())

    elif period == "this_week":
        return week_window(today)

    elif period == "last_week":
        return week_window(today - timedelta(days=7))

    elif period == "this_month":
        return month_window(today)

    elif period == "last_month":
        return month_window(today.replace(day=1) - timedelta(days=1))

    elif period == "this_year":
        return DateWindow(
            start=date(today.year, 1, 1), end=date(today.year, 12, 31), label=str(today.year)
        )

    elif period == "last_year":
        year = today.year - 1
        return DateWindow(start=date(year, 1, 1), end=date(year, 12, 31), label=str(year))

    elif period == "custom":
        if custom_start is None or custom_end is None:
            raise InvalidPeriodError("custom_start and custom_end are required for custom period")
        if custom_end < custom_start:
            raise InvalidPeriodError("custom_end must not be before custom_start")
        label = f"{custom_start.isoformat()} - {custom_end.isoformat()}"
        return DateWindow(start=custom_start, end=custom_end, label=label)

    else:
        raise InvalidPeriodError(
            f"Invalid period: {period}. Must be one of: {', '.join(PERIODS)}"
        )
