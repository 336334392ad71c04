"""Conversion of source records into normalized calendar occurrences."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from timehub_engine.config import settings
from timehub_engine.course_schedule import course_blocks, parse_course_schedule, parse_schedule_text
from timehub_engine.schema import (
    ASSIGNMENT_COLOR,
    EXAM_COLOR,
    TASK_COLOR,
    WELLBEING_COLOR,
    Assignment,
    CalendarOccurrence,
    Course,
    Task,
    WellbeingLog,
)
from timehub_engine.weeks import as_date, date_key, start_of_day, sunday_week_start

logger = logging.getLogger(__name__)


def parse_clock_time(value: Optional[str]) -> Optional[time]:
    """Parse ``HH:MM``; ``None`` when absent or malformed."""

    if not value:
        return None
    try:
        hours, minutes = (int(part) for part in value.split(":", maxsplit=1))
        return time(hours, minutes)
    except ValueError:
        logger.warning(f"Malformed clock time {value!r}")
        return None


def _duration(minutes: Optional[int]) -> timedelta:
    return timedelta(minutes=minutes or settings.DEFAULT_DURATION_MIN)


def task_occurrence(task: Task, day: date) -> CalendarOccurrence:
    """Materialize one task occurrence on ``day``."""

    at = parse_clock_time(task.time) or parse_clock_time(settings.DEFAULT_TASK_TIME) or time(9, 0)
    start = datetime.combine(day, at)
    key = date_key(day)
    return CalendarOccurrence(
        id=f"task_{task.id}_{key}",
        title=task.title,
        start=start,
        end=start + _duration(task.duration_minutes),
        type="Task",
        color=task.color or TASK_COLOR,
        is_completed=key in task.completion_history,
        meta={"task_id": task.id, "date_key": key},
    )


def assignment_occurrence(
    assignment: Assignment,
    course: Optional[Course],
    start_range: datetime,
    end_range: datetime,
) -> Optional[CalendarOccurrence]:
    """A "due" marker ending at the due timestamp, or ``None``.

    Completed assignments and due dates outside the window produce nothing.
    """

    if assignment.status == "completed":
        return None
    due = assignment.due_date
    if not start_range <= due <= end_range:
        return None

    if assignment.type == "Exam":
        color = EXAM_COLOR
    elif course is not None and course.color:
        color = course.color
    else:
        color = ASSIGNMENT_COLOR

    return CalendarOccurrence(
        id=f"assign_{assignment.id}",
        title=f"DUE: {assignment.title}",
        start=due - timedelta(minutes=settings.ASSIGNMENT_LEAD_MIN),
        end=due,
        type="Assignment",
        color=color,
        meta={"assignment_id": assignment.id, "weight": assignment.weight},
    )


def wellbeing_occurrences(log: WellbeingLog, start_range: datetime, end_range: datetime) -> list[CalendarOccurrence]:
    """One occurrence per timed activity of a log dated inside the window."""

    if not start_range <= start_of_day(log.date) <= end_range:
        return []

    occurrences = []
    for index, activity in enumerate(log.activities):
        at = parse_clock_time(activity.time)
        if at is None:
            continue
        start = datetime.combine(as_date(log.date), at)
        occurrences.append(
            CalendarOccurrence(
                id=f"wb_{log.id}_{index}",
                title=activity.name,
                start=start,
                end=start + _duration(activity.duration_minutes),
                type="Wellbeing",
                color=WELLBEING_COLOR,
                meta={"type": activity.type},
            )
        )
    return occurrences


def course_occurrences(
    course: Course,
    start_range: datetime,
    end_range: datetime,
    course_weeks: str = "current",
    clock=None,
) -> list[CalendarOccurrence]:
    """Weekly course blocks overlapping the window.

    ``current`` lays the schedule onto the clock's current week only;
    ``window`` repeats it for every Sunday-based week the window touches.
    """

    if course_weeks == "window":
        parsed = parse_schedule_text(course.schedule)
        if parsed is None:
            return []
        blocks = []
        week_start = sunday_week_start(start_range)
        while week_start <= as_date(end_range):
            blocks.extend(course_blocks(parsed, course.name, course.color, course.id, week_start, tag_week=True))
            week_start += timedelta(days=7)
    else:
        blocks = parse_course_schedule(course.schedule, course.name, course.color, course.id, clock=clock)

    return [block for block in blocks if block.end >= start_range and block.start <= end_range]
