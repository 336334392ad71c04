"""Streamlit demo UI for timehub-engine."""

from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Any

from timehub_engine.adapters import json_adapter
from timehub_engine.completion import completion_progress
from timehub_engine.config import configure_logging
from timehub_engine.schema import AppState, OCCURRENCE_TYPES
from timehub_engine.unify import unify
from timehub_engine.views import VIEW_MODES, padded_range, registry_tasks, view_range
from timehub_engine.weeks import iso_week_number, iso_week_range
from timehub_engine.workload import daily_minutes, month_overview

DEMO_STATE = "examples/sample_state.json"


def _header(mode: str, selected: date) -> str:
    if mode == "Week":
        start, end = iso_week_range(selected)
        return f"Week {iso_week_number(selected)} · {start:%d %b} – {end:%d %b %Y}"
    if mode == "Month":
        return f"{selected:%B %Y}"
    if mode == "Year":
        return str(selected.year)
    return f"{selected:%A %d %B %Y}"


def _occurrence_rows(occurrences: list) -> list[dict[str, Any]]:
    return [
        {
            "start": f"{occurrence.start:%a %d %b %H:%M}",
            "end": f"{occurrence.end:%H:%M}",
            "type": occurrence.type,
            "title": occurrence.title,
            "done": "✓" if occurrence.is_completed else "",
        }
        for occurrence in occurrences
    ]


def run_engine(state: AppState, mode: str, selected: date, course_weeks: str) -> dict[str, Any]:
    """Run all engine steps and return a UI-friendly result payload."""

    visible_start, visible_end = view_range(mode, selected)
    start, end = padded_range(visible_start, visible_end)
    occurrences = unify(state, start, end, course_weeks=course_weeks)
    visible = [o for o in occurrences if visible_start <= o.start <= visible_end]

    registry = registry_tasks(state.tasks, mode, selected)
    days, types, matrix = daily_minutes(visible, visible_start, visible_end)

    return {
        "header": _header(mode, selected),
        "occurrences": visible,
        "type_counts": Counter(o.type for o in visible),
        "registry": registry,
        "progress": completion_progress(registry, selected),
        "workload": {kind: matrix[:, index].tolist() for index, kind in enumerate(types)},
        "workload_days": [day.isoformat() for day in days],
        "months": month_overview(occurrences, state.tasks, selected.year) if mode == "Year" else [],
    }


def main() -> None:
    import streamlit as st

    configure_logging()
    st.set_page_config(page_title="Time Hub Demo", layout="wide")
    st.title("Time Hub — Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload state blob", type=["json"])
        use_demo = st.checkbox("Load demo state", value=True)
        mode = st.selectbox("View", options=list(VIEW_MODES), index=1)
        selected = st.date_input("Date", value=date(2024, 3, 13))
        course_weeks = st.radio("Course blocks", options=["window", "current"], index=0)

    try:
        if use_demo:
            state = json_adapter.parse(DEMO_STATE)
            data_source = f"demo state ({DEMO_STATE})"
        elif uploaded is not None:
            state = json_adapter.loads(uploaded.getvalue().decode("utf-8"))
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.info("Upload a state blob or enable 'Load demo state'.")
            return

        result = run_engine(state, mode, selected, course_weeks)
        st.success(f"Loaded {len(state.tasks)} tasks and {len(state.courses)} courses from {data_source}.")

        st.subheader(result["header"])
        columns = st.columns(len(OCCURRENCE_TYPES))
        for column, kind in zip(columns, OCCURRENCE_TYPES):
            column.metric(kind, result["type_counts"].get(kind, 0))

        st.subheader("A) Calendar")
        if result["occurrences"]:
            st.table(_occurrence_rows(result["occurrences"]))
        else:
            st.write("Nothing scheduled in this view.")

        st.subheader("B) Registry")
        done, total, percent = result["progress"]
        st.progress(percent / 100.0, text=f"{done}/{total} completed on {selected:%d %b}")
        st.table([{"title": t.title, "recurrence": t.recurrence, "priority": t.priority} for t in result["registry"]])

        st.subheader("C) Workload (minutes per day)")
        st.bar_chart(result["workload"])

        if result["months"]:
            st.subheader("D) Year overview")
            st.table(result["months"])

    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
