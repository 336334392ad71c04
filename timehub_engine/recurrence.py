"""Recurrence expansion by day-by-day scan.

Each rule is a predicate over a single calendar day; expansion asks it for
every day of the window in turn.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from timehub_engine.materialize import task_occurrence
from timehub_engine.schema import CalendarOccurrence, Task
from timehub_engine.weeks import as_date, js_weekday

logger = logging.getLogger(__name__)


def _daily(day: date, anchor: date, task: Task) -> bool:
    return True


def _weekly(day: date, anchor: date, task: Task) -> bool:
    return day.weekday() == anchor.weekday()


def _monthly(day: date, anchor: date, task: Task) -> bool:
    # A month without the anchor's day (e.g. the 31st) simply gets no occurrence.
    return day.day == anchor.day


def _yearly(day: date, anchor: date, task: Task) -> bool:
    return day.day == anchor.day and day.month == anchor.month


def _custom(day: date, anchor: date, task: Task) -> bool:
    return js_weekday(day) in (task.custom_days or ())


def _once(day: date, anchor: date, task: Task) -> bool:
    return day == anchor


RULES = {
    "daily": _daily,
    "weekly": _weekly,
    "monthly": _monthly,
    "yearly": _yearly,
    "custom": _custom,
    "once": _once,
}


def recurrence_dates(task: Task, start_range: date | datetime, end_range: date | datetime) -> list[date]:
    """Calendar days in ``[start_range, end_range]`` on which ``task`` recurs.

    Archived tasks never recur. Days before ``task.start_date`` and after
    ``task.end_date`` (inclusive) are excluded.
    """

    if task.status == "archived":
        logger.debug(f"Task {task.id}: archived, skipped")
        return []

    rule = RULES.get(task.recurrence)
    if rule is None:
        logger.warning(f"Task {task.id}: unknown recurrence {task.recurrence!r}")
        return []

    anchor = as_date(task.start_date)
    day = max(as_date(start_range), anchor)
    last = as_date(end_range)
    if task.end_date is not None and as_date(task.end_date) < last:
        logger.debug(f"Task {task.id}: expansion cut at end date {task.end_date}")
        last = as_date(task.end_date)

    dates = []
    while day <= last:
        if rule(day, anchor, task):
            dates.append(day)
        day += timedelta(days=1)
    return dates


def expand_task_occurrences(tasks: list[Task], start_range: date | datetime, end_range: date | datetime) -> list[CalendarOccurrence]:
    """Materialize every occurrence of every task inside the window, task by task."""

    occurrences: list[CalendarOccurrence] = []
    for task in tasks:
        occurrences.extend(task_occurrence(task, day) for day in recurrence_dates(task, start_range, end_range))
    return occurrences
