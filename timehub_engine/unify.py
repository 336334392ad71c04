"""Merge all record sources into one chronologically ordered occurrence stream."""

from __future__ import annotations

import logging
from datetime import date, datetime

from timehub_engine.config import settings
from timehub_engine.materialize import assignment_occurrence, course_occurrences, wellbeing_occurrences
from timehub_engine.recurrence import expand_task_occurrences
from timehub_engine.schema import AppState, CalendarOccurrence
from timehub_engine.weeks import end_of_day, start_of_day

logger = logging.getLogger(__name__)

COURSE_WEEK_MODES = ("current", "window")


def _window(start_range: date | datetime, end_range: date | datetime) -> tuple[datetime, datetime]:
    # Bare dates cover whole days.
    if not isinstance(start_range, datetime):
        start_range = start_of_day(start_range)
    if not isinstance(end_range, datetime):
        end_range = end_of_day(end_range)
    return start_range, end_range


def unify(
    state: AppState,
    start_range: date | datetime,
    end_range: date | datetime,
    clock=None,
    course_weeks: str | None = None,
) -> list[CalendarOccurrence]:
    """Return every occurrence in the window, sorted ascending by start.

    Sources are gathered as assignments, courses, wellbeing, tasks; the sort
    is stable, so equal start times keep that order. ``course_weeks`` is
    ``"current"`` or ``"window"`` (see ``course_occurrences``) and defaults
    to the ``TIMEHUB_COURSE_WEEKS`` setting.
    """

    start_range, end_range = _window(start_range, end_range)
    mode = course_weeks or settings.COURSE_WEEKS
    if mode not in COURSE_WEEK_MODES:
        logger.warning(f"Unknown course week mode {mode!r}, using 'current'")
        mode = "current"

    courses_by_id = {course.id: course for course in state.courses}
    occurrences: list[CalendarOccurrence] = []

    for assignment in state.assignments:
        occurrence = assignment_occurrence(assignment, courses_by_id.get(assignment.course_id), start_range, end_range)
        if occurrence is not None:
            occurrences.append(occurrence)

    for course in state.courses:
        occurrences.extend(course_occurrences(course, start_range, end_range, mode, clock))

    for log in state.wellbeing:
        occurrences.extend(wellbeing_occurrences(log, start_range, end_range))

    occurrences.extend(expand_task_occurrences(state.tasks, start_range, end_range))

    return sorted(occurrences, key=lambda occurrence: occurrence.start)
