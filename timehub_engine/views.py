"""Display windows for the Day/Week/Month/Year calendar views."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from timehub_engine.config import settings
from timehub_engine.schema import CalendarOccurrence, Task
from timehub_engine.weeks import as_date, date_key, end_of_day, iso_week_range, start_of_day

VIEW_MODES = ("Day", "Week", "Month", "Year")


def view_range(mode: str, selected: date | datetime) -> tuple[datetime, datetime]:
    """Visible window of a view containing ``selected``."""

    day = as_date(selected)
    if mode == "Day":
        return start_of_day(day), end_of_day(day)
    if mode == "Week":
        return tuple(iso_week_range(day))
    if mode == "Month":
        last = calendar.monthrange(day.year, day.month)[1]
        return start_of_day(day.replace(day=1)), end_of_day(day.replace(day=last))
    if mode == "Year":
        return start_of_day(date(day.year, 1, 1)), end_of_day(date(day.year, 12, 31))
    raise ValueError(f"Unknown view mode '{mode}'")


def padded_range(start: datetime, end: datetime, days: int | None = None) -> tuple[datetime, datetime]:
    """Widen a visible window so occurrences bleeding over its edges are generated too."""

    pad = timedelta(days=settings.VIEW_PADDING_DAYS if days is None else days)
    return start - pad, end + pad


def _add_months(day: date, months: int) -> date:
    index = day.month - 1 + months
    year, month = day.year + index // 12, index % 12 + 1
    return day.replace(year=year, month=month, day=min(day.day, calendar.monthrange(year, month)[1]))


def navigate(mode: str, selected: date, direction: int) -> date:
    """Step the selected date by ``direction`` views (negative goes back)."""

    if mode == "Day":
        return selected + timedelta(days=direction)
    if mode == "Week":
        return selected + timedelta(days=7 * direction)
    if mode == "Month":
        return _add_months(selected, direction)
    if mode == "Year":
        return _add_months(selected, 12 * direction)
    raise ValueError(f"Unknown view mode '{mode}'")


def registry_tasks(tasks: list[Task], mode: str, selected: date | datetime) -> list[Task]:
    """Tasks listed beside a view.

    Day shows daily tasks and one-off tasks dated that day; Week, Month and
    Year show tasks with the matching recurrence, and Year also shows plans.
    """

    day = as_date(selected)
    if mode == "Day":
        return [t for t in tasks if t.recurrence == "daily" or (t.recurrence == "once" and as_date(t.start_date) == day)]
    if mode == "Week":
        return [t for t in tasks if t.recurrence == "weekly"]
    if mode == "Month":
        return [t for t in tasks if t.recurrence == "monthly"]
    if mode == "Year":
        return [t for t in tasks if t.recurrence == "yearly" or "Plan" in t.tags]
    return []


def occurrences_on(occurrences: list[CalendarOccurrence], day: date | datetime) -> list[CalendarOccurrence]:
    key = date_key(day)
    return [occurrence for occurrence in occurrences if date_key(occurrence.start) == key]
