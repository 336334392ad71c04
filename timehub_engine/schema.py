"""Core data schema for scheduling records and calendar occurrences."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

RECURRENCE_TYPES = ("once", "daily", "weekly", "monthly", "yearly", "custom")
OCCURRENCE_TYPES = ("Course", "Assignment", "Block", "Wellbeing", "Task")
TASK_STATUSES = ("active", "archived")
PRIORITIES = ("low", "medium", "high")

TASK_COLOR = "#64748b"
EXAM_COLOR = "#f43f5e"
ASSIGNMENT_COLOR = "#a855f7"
WELLBEING_COLOR = "#10b981"


@dataclass
class Task:
    """User-defined schedulable unit of work.

    ``completion_history`` holds local ``YYYY-MM-DD`` keys of the days whose
    occurrence was marked done. ``custom_days`` uses 0=Sunday..6=Saturday.
    """

    id: str
    title: str
    start_date: date
    recurrence: str = "once"
    priority: str = "medium"
    status: str = "active"
    custom_days: list[int] = field(default_factory=list)
    time: Optional[str] = None
    duration_minutes: int = 30
    end_date: Optional[date] = None
    completion_history: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    color: str = TASK_COLOR
    description: Optional[str] = None


@dataclass
class Course:
    id: str
    name: str
    color: str
    schedule: Optional[str] = None
    code: str = ""


@dataclass
class Assignment:
    id: str
    course_id: str
    title: str
    due_date: datetime
    status: str = "pending"
    weight: float = 0.0
    type: str = "Homework"


@dataclass
class WellbeingActivity:
    id: str
    type: str
    name: str
    duration_minutes: int = 30
    time: Optional[str] = None


@dataclass
class WellbeingLog:
    id: str
    date: date
    activities: list[WellbeingActivity] = field(default_factory=list)


@dataclass
class AppState:
    """The slices of the persisted state blob the scheduler reads.

    Keys the scheduler does not understand are kept in ``extra`` so a
    load/dump cycle does not lose them.
    """

    courses: list[Course] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)
    wellbeing: list[WellbeingLog] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class CalendarOccurrence:
    """One concrete, time-bound rendering of a source record."""

    id: str
    title: str
    start: datetime
    end: datetime
    type: str
    color: str
    is_completed: bool = False
    meta: dict[str, Any] = field(default_factory=dict)
