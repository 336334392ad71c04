from datetime import date, datetime, time, timedelta

from timehub_engine.clock import FixedClock
from timehub_engine.materialize import (
    assignment_occurrence,
    course_occurrences,
    parse_clock_time,
    wellbeing_occurrences,
)
from timehub_engine.schema import (
    ASSIGNMENT_COLOR,
    EXAM_COLOR,
    WELLBEING_COLOR,
    Assignment,
    Course,
    WellbeingActivity,
    WellbeingLog,
)

START = datetime(2024, 3, 10)
END = datetime(2024, 3, 16, 23, 59)
COURSE = Course(id="c1", name="Linear Algebra", color="#6366f1", schedule="Mon 10:00 AM")


def make_assignment(**overrides):
    values = {"id": "a1", "course_id": "c1", "title": "Problem Set", "due_date": datetime(2024, 3, 14, 23, 59)}
    values.update(overrides)
    return Assignment(**values)


def test_assignment_due_marker():
    occurrence = assignment_occurrence(make_assignment(weight=5.0), COURSE, START, END)
    assert occurrence.id == "assign_a1"
    assert occurrence.title == "DUE: Problem Set"
    assert occurrence.start == datetime(2024, 3, 14, 22, 59)
    assert occurrence.end == datetime(2024, 3, 14, 23, 59)
    assert occurrence.color == "#6366f1"
    assert occurrence.meta == {"assignment_id": "a1", "weight": 5.0}


def test_assignment_colors():
    assert assignment_occurrence(make_assignment(type="Exam"), COURSE, START, END).color == EXAM_COLOR
    assert assignment_occurrence(make_assignment(), None, START, END).color == ASSIGNMENT_COLOR
    no_color = Course(id="c1", name="Algebra", color="")
    assert assignment_occurrence(make_assignment(), no_color, START, END).color == ASSIGNMENT_COLOR


def test_assignment_filtered_by_status_and_window():
    assert assignment_occurrence(make_assignment(status="completed"), COURSE, START, END) is None
    assert assignment_occurrence(make_assignment(due_date=datetime(2024, 3, 20)), COURSE, START, END) is None


def test_wellbeing_only_timed_activities():
    log = WellbeingLog(
        id="w1",
        date=date(2024, 3, 11),
        activities=[
            WellbeingActivity(id="x", type="Sport", name="Run", duration_minutes=40, time="07:00"),
            WellbeingActivity(id="y", type="Rest", name="Nap", duration_minutes=20),
            WellbeingActivity(id="z", type="Social", name="Call", duration_minutes=0, time="20:30"),
        ],
    )
    occurrences = wellbeing_occurrences(log, START, END)
    assert [o.id for o in occurrences] == ["wb_w1_0", "wb_w1_2"]
    assert occurrences[0].start == datetime(2024, 3, 11, 7, 0)
    assert occurrences[0].end == datetime(2024, 3, 11, 7, 40)
    assert occurrences[1].end - occurrences[1].start == timedelta(minutes=30)
    assert occurrences[0].color == WELLBEING_COLOR
    assert occurrences[0].meta == {"type": "Sport"}


def test_wellbeing_log_outside_window():
    log = WellbeingLog(id="w1", date=date(2024, 3, 20), activities=[WellbeingActivity("x", "Sport", "Run", 40, "07:00")])
    assert wellbeing_occurrences(log, START, END) == []


def test_course_blocks_projected_over_window():
    blocks = course_occurrences(COURSE, datetime(2024, 3, 1), datetime(2024, 3, 31, 23, 59), course_weeks="window")
    assert [b.start.date() for b in blocks] == [date(2024, 3, d) for d in (4, 11, 18, 25)]
    assert blocks[1].id == "course_c1_1_2024-03-10"
    assert len({b.id for b in blocks}) == 4


def test_course_blocks_anchored_to_current_week():
    clock = FixedClock(datetime(2024, 3, 13, 8, 0))
    blocks = course_occurrences(COURSE, START, END, course_weeks="current", clock=clock)
    assert [b.id for b in blocks] == ["course_c1_1"]

    later = course_occurrences(COURSE, datetime(2024, 5, 1), datetime(2024, 5, 31), course_weeks="current", clock=clock)
    assert later == []


def test_parse_clock_time():
    assert parse_clock_time("7:05") == time(7, 5)
    assert parse_clock_time(None) is None
    assert parse_clock_time("bad") is None
    assert parse_clock_time("24:00") is None
