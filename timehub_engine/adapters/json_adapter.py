"""JSON adapter for the persisted application state blob.

The blob uses the camelCase keys written by the tracker front end. Only the
collections the scheduler reads are turned into dataclasses; every other
top-level key is carried through ``AppState.extra`` untouched.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime

from timehub_engine.schema import (
    RECURRENCE_TYPES,
    TASK_COLOR,
    AppState,
    Assignment,
    CalendarOccurrence,
    Course,
    Task,
    WellbeingActivity,
    WellbeingLog,
)

logger = logging.getLogger(__name__)

_SCHEDULING_KEYS = ("courses", "assignments", "wellbeing", "tasks")
# Keys older blobs may lack; they are added empty on load.
_MIGRATED_KEYS = ("registeredUsers", "tasks")


def _require(item: dict, fields: tuple[str, ...], label: str) -> None:
    if not isinstance(item, dict):
        raise ValueError(f"{label}: expected an object")
    missing = [field for field in fields if item.get(field) in (None, "")]
    if missing:
        raise ValueError(f"{label}: missing required fields {missing}")


def _parse_date(value, label: str, field: str) -> date:
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise ValueError(f"{label}: malformed {field}") from exc


def _parse_timestamp(value, label: str, field: str) -> datetime:
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1]
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"{label}: malformed {field}") from exc
    # Scheduling runs on naive local clock values.
    return parsed.replace(tzinfo=None)


def _parse_int(value, label: str, field: str) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label}: invalid {field}") from exc


def _parse_task(item: dict, index: int) -> Task:
    label = f"Task {index}"
    _require(item, ("id", "title", "startDate"), label)

    recurrence = str(item.get("recurrence") or "once").strip()
    if recurrence not in RECURRENCE_TYPES:
        raise ValueError(f"{label}: invalid recurrence '{recurrence}'")

    custom_days = item.get("customDays") or []
    try:
        custom_days = [int(day) for day in custom_days]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label}: invalid customDays") from exc

    end_raw = item.get("endDate")
    return Task(
        id=str(item["id"]),
        title=str(item["title"]),
        start_date=_parse_date(item["startDate"], label, "startDate"),
        recurrence=recurrence,
        priority=item.get("priority") or "medium",
        status=item.get("status") or "active",
        custom_days=custom_days,
        time=item.get("time") or None,
        duration_minutes=_parse_int(item.get("durationMinutes"), label, "durationMinutes"),
        end_date=_parse_date(end_raw, label, "endDate") if end_raw else None,
        completion_history=[str(key) for key in item.get("completionHistory") or []],
        tags=list(item.get("tags") or []),
        color=item.get("color") or TASK_COLOR,
        description=item.get("description"),
    )


def _parse_course(item: dict, index: int) -> Course:
    _require(item, ("id", "name"), f"Course {index}")
    return Course(
        id=str(item["id"]),
        name=str(item["name"]),
        color=item.get("color") or "",
        schedule=item.get("schedule"),
        code=item.get("code") or "",
    )


def _parse_assignment(item: dict, index: int) -> Assignment:
    label = f"Assignment {index}"
    _require(item, ("id", "title", "dueDate"), label)
    try:
        weight = float(item.get("weight") or 0.0)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label}: invalid weight") from exc
    return Assignment(
        id=str(item["id"]),
        course_id=str(item.get("courseId") or ""),
        title=str(item["title"]),
        due_date=_parse_timestamp(item["dueDate"], label, "dueDate"),
        status=item.get("status") or "pending",
        weight=weight,
        type=item.get("type") or "Homework",
    )


def _parse_log(item: dict, index: int) -> WellbeingLog:
    label = f"Wellbeing log {index}"
    _require(item, ("id", "date"), label)
    activities = []
    for position, activity in enumerate(item.get("activities") or [], start=1):
        _require(activity, ("name",), f"{label}, activity {position}")
        activities.append(
            WellbeingActivity(
                id=str(activity.get("id") or position),
                type=activity.get("type") or "",
                name=str(activity["name"]),
                duration_minutes=_parse_int(activity.get("durationMinutes"), label, "durationMinutes"),
                time=activity.get("time") or None,
            )
        )
    return WellbeingLog(id=str(item["id"]), date=_parse_date(item["date"], label, "date"), activities=activities)


def from_payload(payload: dict) -> AppState:
    """Build an ``AppState`` from an already-decoded blob."""

    if not isinstance(payload, dict):
        raise ValueError("JSON payload must be an object")

    extra = {key: value for key, value in payload.items() if key not in _SCHEDULING_KEYS}
    for key in _MIGRATED_KEYS:
        if key not in payload:
            logger.info(f"State blob has no '{key}', starting empty")
            if key not in _SCHEDULING_KEYS:
                extra[key] = []

    return AppState(
        courses=[_parse_course(item, i) for i, item in enumerate(payload.get("courses") or [], start=1)],
        assignments=[_parse_assignment(item, i) for i, item in enumerate(payload.get("assignments") or [], start=1)],
        wellbeing=[_parse_log(item, i) for i, item in enumerate(payload.get("wellbeing") or [], start=1)],
        tasks=[_parse_task(item, i) for i, item in enumerate(payload.get("tasks") or [], start=1)],
        extra=extra,
    )


def loads(text: str) -> AppState:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError("State blob is not valid JSON") from exc
    return from_payload(payload)


def parse(file_path: str) -> AppState:
    """Parse a JSON state file into an ``AppState``."""

    with open(file_path, encoding="utf-8") as handle:
        return loads(handle.read())


def to_payload(state: AppState) -> dict:
    """Inverse of ``from_payload``: camelCase blob with the extra keys restored."""

    payload = dict(state.extra)
    payload["courses"] = [
        {"id": c.id, "code": c.code, "name": c.name, "color": c.color, "schedule": c.schedule} for c in state.courses
    ]
    payload["assignments"] = [
        {
            "id": a.id,
            "courseId": a.course_id,
            "title": a.title,
            "dueDate": a.due_date.isoformat(),
            "status": a.status,
            "weight": a.weight,
            "type": a.type,
        }
        for a in state.assignments
    ]
    payload["wellbeing"] = [
        {
            "id": log.id,
            "date": log.date.isoformat(),
            "activities": [
                {"id": act.id, "type": act.type, "name": act.name, "durationMinutes": act.duration_minutes, "time": act.time}
                for act in log.activities
            ],
        }
        for log in state.wellbeing
    ]
    payload["tasks"] = [
        {
            "id": t.id,
            "title": t.title,
            "description": t.description,
            "priority": t.priority,
            "status": t.status,
            "recurrence": t.recurrence,
            "customDays": list(t.custom_days),
            "time": t.time,
            "durationMinutes": t.duration_minutes,
            "startDate": t.start_date.isoformat(),
            "endDate": t.end_date.isoformat() if t.end_date else None,
            "completionHistory": list(t.completion_history),
            "tags": list(t.tags),
            "color": t.color,
        }
        for t in state.tasks
    ]
    return payload


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def occurrence_payload(occurrence: CalendarOccurrence) -> dict:
    """An occurrence in the camelCase shape the front end reads, meta keys included."""

    return {
        "id": occurrence.id,
        "title": occurrence.title,
        "start": occurrence.start.isoformat(timespec="minutes"),
        "end": occurrence.end.isoformat(timespec="minutes"),
        "type": occurrence.type,
        "color": occurrence.color,
        "isCompleted": occurrence.is_completed,
        "meta": {_camel(key): value for key, value in occurrence.meta.items()},
    }


def dump(state: AppState, file_path: str) -> None:
    with open(file_path, "w", encoding="utf-8") as handle:
        json.dump(to_payload(state), handle, indent=2)
