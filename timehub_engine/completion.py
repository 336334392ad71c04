"""Completion-history toggling and progress counters."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

from timehub_engine.clock import resolve
from timehub_engine.schema import Task
from timehub_engine.weeks import date_key as to_date_key


def _key(day: str | date | datetime) -> str:
    return day if isinstance(day, str) else to_date_key(day)


def is_completed(task: Task, day: str | date | datetime) -> bool:
    return _key(day) in task.completion_history


def toggle_completion(task: Task, day: str | date | datetime) -> Task:
    """Return a copy of ``task`` with ``day`` added to or removed from its history."""

    key = _key(day)
    if key in task.completion_history:
        history = [entry for entry in task.completion_history if entry != key]
    else:
        history = [*task.completion_history, key]
    return replace(task, completion_history=history)


def toggle_in_registry(tasks: list[Task], task_id: str, day: str | date | datetime) -> list[Task]:
    """Toggle one task inside a task list; unknown ids leave the list unchanged."""

    return [toggle_completion(task, day) if task.id == task_id else task for task in tasks]


def completion_progress(tasks: list[Task], day: str | date | datetime) -> tuple[int, int, float]:
    """Return (done, total, percent) of ``tasks`` completed on ``day``."""

    total = len(tasks)
    done = sum(1 for task in tasks if is_completed(task, day))
    return done, total, (done / total * 100.0) if total else 0.0


def completed_today(tasks: list[Task], clock=None) -> int:
    today = resolve(clock).now()
    return sum(1 for task in tasks if is_completed(task, today))
