"""Scheduled-time summaries over a unified occurrence stream."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import numpy as np

from timehub_engine.schema import OCCURRENCE_TYPES, CalendarOccurrence, Task
from timehub_engine.weeks import as_date


def daily_minutes(
    occurrences: list[CalendarOccurrence],
    start: date | datetime,
    end: date | datetime,
) -> tuple[list[date], list[str], np.ndarray]:
    """Minutes booked per day (rows) and occurrence type (columns).

    Occurrences are attributed to the day they start on; those starting
    outside the window are ignored.
    """

    first, last = as_date(start), as_date(end)
    if last < first:
        return [], list(OCCURRENCE_TYPES), np.zeros((0, len(OCCURRENCE_TYPES)))

    days = [first + timedelta(days=offset) for offset in range((last - first).days + 1)]
    matrix = np.zeros((len(days), len(OCCURRENCE_TYPES)), dtype=float)
    columns = {kind: index for index, kind in enumerate(OCCURRENCE_TYPES)}

    for occurrence in occurrences:
        row = (occurrence.start.date() - first).days
        if 0 <= row < len(days) and occurrence.type in columns:
            matrix[row, columns[occurrence.type]] += (occurrence.end - occurrence.start).total_seconds() / 60.0

    return days, list(OCCURRENCE_TYPES), matrix


def month_overview(occurrences: list[CalendarOccurrence], tasks: list[Task], year: int) -> list[dict]:
    """Per-month occurrence count and high-priority task occurrences for ``year``."""

    high_priority = {task.id for task in tasks if task.priority == "high"}
    counts = np.zeros(12, dtype=int)
    urgent = np.zeros(12, dtype=int)

    for occurrence in occurrences:
        if occurrence.start.year != year:
            continue
        month = occurrence.start.month - 1
        counts[month] += 1
        if occurrence.type == "Task" and occurrence.meta.get("task_id") in high_priority:
            urgent[month] += 1

    return [
        {"month": month + 1, "occurrences": int(counts[month]), "high_priority": int(urgent[month])}
        for month in range(12)
    ]
