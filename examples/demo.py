"""Demo script for timehub-engine."""

import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from timehub_engine.adapters.json_adapter import parse
from timehub_engine.completion import completion_progress, toggle_in_registry
from timehub_engine.unify import unify
from timehub_engine.views import padded_range, registry_tasks, view_range
from timehub_engine.weeks import iso_week_number


def main() -> None:
    state = parse("examples/sample_state.json")
    selected = date(2024, 3, 13)
    start, end = padded_range(*view_range("Week", selected))

    print(f"Week {iso_week_number(selected)}")
    for occurrence in unify(state, start, end, course_weeks="window"):
        mark = "x" if occurrence.is_completed else " "
        print(f"[{mark}] {occurrence.start:%a %d %b %H:%M} {occurrence.type:<10} {occurrence.title}")

    gym_day = date(2024, 3, 12)
    state.tasks = toggle_in_registry(state.tasks, "t-run", gym_day)
    print("Weekly routines done:", completion_progress(registry_tasks(state.tasks, "Week", gym_day), gym_day))


if __name__ == "__main__":
    main()
