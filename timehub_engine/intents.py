"""Task factories for the three creation intents: quick, routine and plan.

All three produce an ordinary ``Task``; they only differ in which inputs
are required and which defaults fill the rest.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from timehub_engine.clock import resolve
from timehub_engine.schema import RECURRENCE_TYPES, Task

QUICK_COLOR = "#fbbf24"
ROUTINE_COLOR = "#3b82f6"
PLAN_COLOR = "#a855f7"


def _task_id(task_id: Optional[str], clock) -> str:
    if task_id:
        return task_id
    return str(int(resolve(clock).now().timestamp() * 1000))


def _require_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise ValueError("Task title is required")
    return title


def quick_task(
    title: str,
    start_date: Optional[date] = None,
    time: Optional[str] = None,
    duration_minutes: int = 30,
    priority: str = "medium",
    task_id: Optional[str] = None,
    clock=None,
) -> Task:
    """One-off task; date and time default to the clock's current moment."""

    now = resolve(clock).now()
    return Task(
        id=_task_id(task_id, clock),
        title=_require_title(title),
        start_date=start_date or now.date(),
        recurrence="once",
        priority=priority,
        time=time or now.strftime("%H:%M"),
        duration_minutes=duration_minutes,
        color=QUICK_COLOR,
    )


def routine_task(
    title: str,
    recurrence: str = "weekly",
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    custom_days: Optional[list[int]] = None,
    time: str = "09:00",
    duration_minutes: int = 60,
    color: str = ROUTINE_COLOR,
    task_id: Optional[str] = None,
    clock=None,
) -> Task:
    if recurrence not in RECURRENCE_TYPES:
        raise ValueError(f"Unknown recurrence '{recurrence}'")
    if any(not 0 <= day <= 6 for day in custom_days or ()):
        raise ValueError("custom_days must be weekday indices 0 (Sunday) to 6 (Saturday)")

    return Task(
        id=_task_id(task_id, clock),
        title=_require_title(title),
        start_date=start_date or resolve(clock).now().date(),
        recurrence=recurrence,
        custom_days=sorted(set(custom_days or [])),
        time=time,
        duration_minutes=duration_minutes,
        end_date=end_date,
        tags=["Routine"],
        color=color,
    )


def plan_task(
    title: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    context: str = "",
    color: str = PLAN_COLOR,
    task_id: Optional[str] = None,
    clock=None,
) -> Task:
    """Long-horizon plan, pinned as a high-priority one-hour slot on its start date.

    The horizon end is recorded in the description only; the plan itself
    does not recur.
    """

    start = start_date or resolve(clock).now().date()
    horizon_end = end_date.isoformat() if end_date else "Ongoing"
    return Task(
        id=_task_id(task_id, clock),
        title=_require_title(title),
        description=f"Horizon: {start.isoformat()} to {horizon_end}. Context: {context}",
        start_date=start,
        recurrence="once",
        priority="high",
        time="09:00",
        duration_minutes=60,
        tags=[tag for tag in ("Plan", context) if tag],
        color=color,
    )
