"""ISO-8601 week arithmetic and calendar-day helpers.

Every function here is pure: inputs are never mutated, and ``datetime`` /
``date`` values are accepted interchangeably where only the calendar day
matters.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import NamedTuple

END_OF_DAY = time(23, 59, 59, 999000)


class WeekRange(NamedTuple):
    start: datetime
    end: datetime


def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(value: date | datetime) -> datetime:
    return datetime.combine(as_date(value), time.min)


def end_of_day(value: date | datetime) -> datetime:
    return datetime.combine(as_date(value), END_OF_DAY)


def date_key(value: date | datetime) -> str:
    """Local calendar key (``YYYY-MM-DD``) used by completion history."""

    return as_date(value).isoformat()


def js_weekday(value: date | datetime) -> int:
    """Weekday index with 0=Sunday..6=Saturday."""

    return (as_date(value).weekday() + 1) % 7


def iso_week_number(value: date | datetime) -> int:
    """Return the ISO-8601 week number (week 1 holds the first Thursday)."""

    day = as_date(value)
    thursday = day + timedelta(days=3 - day.weekday())
    jan1 = date(thursday.year, 1, 1)
    return (thursday - jan1).days // 7 + 1


def iso_week_range(value: date | datetime) -> WeekRange:
    """Monday 00:00:00.000 through the following Sunday 23:59:59.999."""

    monday = as_date(value) - timedelta(days=as_date(value).weekday())
    return WeekRange(start_of_day(monday), end_of_day(monday + timedelta(days=6)))


def iso_week_start(year: int, week: int) -> date:
    """Monday of ISO week ``week`` in ISO year ``year``.

    Raises ``ValueError`` when the year has no such week.
    """

    return date.fromisocalendar(year, week, 1)


def iso_weeks_in_month(year: int, month: int) -> list[int]:
    """Distinct ISO week numbers touched by a month, in calendar order."""

    weeks: list[int] = []
    for day in range(1, calendar.monthrange(year, month)[1] + 1):
        week = iso_week_number(date(year, month, day))
        if week not in weeks:
            weeks.append(week)
    return weeks


def sunday_week_start(value: date | datetime) -> date:
    """Sunday opening the Sunday-based week that contains ``value``."""

    day = as_date(value)
    return day - timedelta(days=js_weekday(day))
