"""CSV adapter: bulk task import and occurrence export."""

from __future__ import annotations

import csv
from datetime import date

from timehub_engine.schema import RECURRENCE_TYPES, TASK_COLOR, CalendarOccurrence, Task

_REQUIRED_FIELDS = {"id", "title", "start_date"}
_OCCURRENCE_FIELDS = ["id", "type", "title", "start", "end", "color", "is_completed"]


def _split(value: str | None) -> list[str]:
    return [part.strip() for part in (value or "").split(";") if part.strip()]


def _parse_row(row: dict, row_number: int) -> Task:
    missing = sorted(field for field in _REQUIRED_FIELDS if not row.get(field))
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    try:
        start_date = date.fromisoformat(row["start_date"].strip())
        end_date = date.fromisoformat(row["end_date"].strip()) if row.get("end_date") else None
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: malformed date") from exc

    recurrence = (row.get("recurrence") or "once").strip()
    if recurrence not in RECURRENCE_TYPES:
        raise ValueError(f"Row {row_number}: invalid recurrence '{recurrence}'")

    try:
        custom_days = [int(day) for day in _split(row.get("custom_days"))]
        duration = int(row["duration_minutes"]) if row.get("duration_minutes") else 30
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: invalid number") from exc

    return Task(
        id=row["id"].strip(),
        title=row["title"].strip(),
        start_date=start_date,
        recurrence=recurrence,
        priority=(row.get("priority") or "medium").strip(),
        custom_days=custom_days,
        time=(row.get("time") or "").strip() or None,
        duration_minutes=duration,
        end_date=end_date,
        tags=_split(row.get("tags")),
        color=(row.get("color") or "").strip() or TASK_COLOR,
    )


def parse_tasks(file_path: str) -> list[Task]:
    """Parse a CSV task list.

    Multi-valued columns (``custom_days``, ``tags``) are ``;``-separated.
    """

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []
        return [_parse_row(row, row_number) for row_number, row in enumerate(reader, start=2)]


def write_occurrences(occurrences: list[CalendarOccurrence], file_path: str) -> None:
    with open(file_path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=_OCCURRENCE_FIELDS)
        writer.writeheader()
        for occurrence in occurrences:
            writer.writerow(
                {
                    "id": occurrence.id,
                    "type": occurrence.type,
                    "title": occurrence.title,
                    "start": occurrence.start.isoformat(timespec="minutes"),
                    "end": occurrence.end.isoformat(timespec="minutes"),
                    "color": occurrence.color,
                    "is_completed": occurrence.is_completed,
                }
            )
