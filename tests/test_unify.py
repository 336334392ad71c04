from datetime import date, datetime
from pathlib import Path

import pytest

from timehub_engine.adapters import json_adapter
from timehub_engine.clock import FixedClock
from timehub_engine.completion import toggle_completion
from timehub_engine.schema import AppState, Assignment, Course, Task, WellbeingActivity, WellbeingLog
from timehub_engine.unify import unify

CLOCK = FixedClock(datetime(2024, 3, 13, 8, 0))
SAMPLE_STATE = Path(__file__).resolve().parents[1] / "examples" / "sample_state.json"


@pytest.fixture
def state():
    return AppState(
        courses=[Course(id="c1", name="Algebra", color="#6366f1", schedule="Mon 10:00 AM")],
        assignments=[
            Assignment(id="a1", course_id="c1", title="Quiz prep", due_date=datetime(2024, 3, 11, 11, 0)),
            Assignment(id="a2", course_id="c1", title="Old", due_date=datetime(2024, 3, 12, 9, 0), status="completed"),
        ],
        wellbeing=[
            WellbeingLog(id="w1", date=date(2024, 3, 11), activities=[WellbeingActivity("x", "Sport", "Run", 30, "10:00")])
        ],
        tasks=[
            Task(id="t1", title="Review", start_date=date(2024, 3, 11), recurrence="once", time="10:00"),
            Task(id="t2", title="Stretch", start_date=date(2024, 3, 1), recurrence="daily", time="07:30"),
        ],
    )


def test_sorted_by_start(state):
    result = unify(state, date(2024, 3, 10), date(2024, 3, 16), clock=CLOCK)
    assert all(a.start <= b.start for a, b in zip(result, result[1:]))


def test_ties_keep_source_order(state):
    result = unify(state, date(2024, 3, 10), date(2024, 3, 16), clock=CLOCK)
    at_ten = [o.type for o in result if o.start == datetime(2024, 3, 11, 10, 0)]
    assert at_ten == ["Assignment", "Course", "Wellbeing", "Task"]


def test_idempotent(state):
    first = unify(state, date(2024, 3, 10), date(2024, 3, 16), clock=CLOCK)
    second = unify(state, date(2024, 3, 10), date(2024, 3, 16), clock=CLOCK)
    assert [o.id for o in first] == [o.id for o in second]
    assert first == second


@pytest.mark.parametrize("course_weeks", ["current", "window"])
def test_widening_window_never_drops_occurrences(state, course_weeks):
    narrow = unify(state, datetime(2024, 3, 11, 12, 0), date(2024, 3, 13), clock=CLOCK, course_weeks=course_weeks)
    wide = unify(state, date(2024, 3, 1), date(2024, 3, 31), clock=CLOCK, course_weeks=course_weeks)
    assert {o.id for o in narrow} <= {o.id for o in wide}


def test_completed_assignment_never_appears(state):
    result = unify(state, date(2024, 1, 1), date(2024, 12, 31), clock=CLOCK)
    assert "assign_a2" not in {o.id for o in result}


def test_date_end_covers_whole_day(state):
    state.assignments.append(Assignment(id="late", course_id="c1", title="Late", due_date=datetime(2024, 3, 16, 23, 0)))
    result = unify(state, date(2024, 3, 10), date(2024, 3, 16), clock=CLOCK)
    assert "assign_late" in {o.id for o in result}


def test_unknown_course_week_mode_falls_back(state):
    result = unify(state, date(2024, 3, 10), date(2024, 3, 16), clock=CLOCK, course_weeks="fortnight")
    assert "course_c1_1" in {o.id for o in result}


def test_completion_toggle_roundtrip(state):
    original = list(state.tasks[1].completion_history)

    def stretch_on_12th():
        result = unify(state, date(2024, 3, 12), date(2024, 3, 12), clock=CLOCK)
        return next(o for o in result if o.id == "task_t2_2024-03-12")

    state.tasks[1] = toggle_completion(state.tasks[1], "2024-03-12")
    assert stretch_on_12th().is_completed is True

    state.tasks[1] = toggle_completion(state.tasks[1], "2024-03-12")
    assert stretch_on_12th().is_completed is False
    assert state.tasks[1].completion_history == original


def test_sample_state_week():
    state = json_adapter.parse(str(SAMPLE_STATE))
    result = unify(state, date(2024, 3, 10), date(2024, 3, 16), clock=CLOCK, course_weeks="window")
    counts = {}
    for occurrence in result:
        counts[occurrence.type] = counts.get(occurrence.type, 0) + 1
    assert counts == {"Assignment": 2, "Course": 4, "Wellbeing": 1, "Task": 5}
    assert next(o for o in result if o.id == "task_t-read_2024-03-11").is_completed
