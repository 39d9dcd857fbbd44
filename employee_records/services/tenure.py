"""
Tenure calculation.

Experience is counted in whole calendar months between the
join date and today. Day-of-month is ignored: someone who
joined on the 31st of last month has one month of experience
on the 1st of this month, which is how the figure is shown
to users.

Nothing here touches storage. Experience is never persisted;
callers recompute it on every read.
"""

import calendar
from datetime import date, datetime
from typing import NamedTuple


class Tenure(NamedTuple):
    months: int
    years: int
    remainder_months: int


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def months_between(start: date, end: date) -> int:
    """Signed calendar-month difference, ignoring day-of-month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def experience_from_date(
    date_of_joining: date | datetime, today: date | None = None
) -> Tenure:
    """
    Derive experience from a join date.

    A join date in the future (or later this month) yields zero,
    never a negative count.
    """
    today = today or date.today()
    months = max(0, months_between(_as_date(date_of_joining), today))
    return Tenure(months=months, years=months // 12, remainder_months=months % 12)


def _month_index(day: date) -> int:
    return day.year * 12 + (day.month - 1)


def first_day_months_ago(today: date, months: int) -> date:
    """First day of the calendar month ``months`` before today's month."""
    index = _month_index(today) - months
    year, month = divmod(index, 12)
    if year < date.min.year:
        return date.min
    return date(year, month + 1, 1)


def last_day_months_ago(today: date, months: int) -> date:
    """Last day of the calendar month ``months`` before today's month."""
    index = _month_index(today) - months
    year, month = divmod(index, 12)
    if year < date.min.year:
        return date.min
    if year > date.max.year:
        return date.max
    return date(year, month + 1, calendar.monthrange(year, month + 1)[1])
