from datetime import date, datetime, timedelta

from timehub_engine.recurrence import expand_task_occurrences, recurrence_dates
from timehub_engine.schema import Task


def make_task(**overrides):
    values = {"id": "t1", "title": "Gym", "start_date": date(2024, 3, 5), "recurrence": "daily"}
    values.update(overrides)
    return Task(**values)


def test_weekly_three_tuesdays_in_21_days():
    task = make_task(recurrence="weekly")
    dates = recurrence_dates(task, date(2024, 3, 5), date(2024, 3, 25))
    assert dates == [date(2024, 3, 5), date(2024, 3, 12), date(2024, 3, 19)]
    assert all(day.weekday() == 1 for day in dates)


def test_custom_weekdays_over_one_week():
    task = make_task(recurrence="custom", custom_days=[1, 3, 5], start_date=date(2024, 3, 1))
    dates = recurrence_dates(task, date(2024, 3, 10), date(2024, 3, 16))
    assert dates == [date(2024, 3, 11), date(2024, 3, 13), date(2024, 3, 15)]


def test_custom_without_days_never_recurs():
    task = make_task(recurrence="custom", custom_days=[])
    assert recurrence_dates(task, date(2024, 3, 1), date(2024, 3, 31)) == []


def test_once_lands_on_start_date():
    task = make_task(recurrence="once", start_date=date(2024, 3, 10))
    assert recurrence_dates(task, date(2024, 3, 1), date(2024, 3, 31)) == [date(2024, 3, 10)]


def test_monthly_skips_months_without_the_day():
    task = make_task(recurrence="monthly", start_date=date(2024, 1, 31))
    dates = recurrence_dates(task, date(2024, 1, 1), date(2024, 6, 30))
    assert dates == [date(2024, 1, 31), date(2024, 3, 31), date(2024, 5, 31)]


def test_yearly_on_leap_day():
    task = make_task(recurrence="yearly", start_date=date(2020, 2, 29))
    dates = recurrence_dates(task, date(2020, 1, 1), date(2028, 12, 31))
    assert dates == [date(2020, 2, 29), date(2024, 2, 29), date(2028, 2, 29)]


def test_end_date_is_inclusive_cut_off():
    task = make_task(start_date=date(2024, 3, 1), end_date=date(2024, 3, 5))
    dates = recurrence_dates(task, date(2024, 3, 1), date(2024, 3, 31))
    assert dates[0] == date(2024, 3, 1)
    assert dates[-1] == date(2024, 3, 5)
    assert len(dates) == 5


def test_nothing_before_start_date():
    task = make_task(start_date=date(2024, 3, 1))
    dates = recurrence_dates(task, date(2024, 2, 1), date(2024, 3, 3))
    assert dates == [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)]


def test_archived_and_unknown_rules_produce_nothing():
    assert recurrence_dates(make_task(status="archived"), date(2024, 3, 1), date(2024, 3, 31)) == []
    assert recurrence_dates(make_task(recurrence="hourly"), date(2024, 3, 1), date(2024, 3, 31)) == []


def test_inverted_window_is_empty():
    assert recurrence_dates(make_task(), date(2024, 3, 31), date(2024, 3, 1)) == []


def test_window_starting_mid_day_keeps_that_day():
    task = make_task(recurrence="once", start_date=date(2024, 3, 12))
    assert recurrence_dates(task, datetime(2024, 3, 12, 20, 0), datetime(2024, 3, 13)) == [date(2024, 3, 12)]


def test_expanded_occurrences_use_defaults():
    task = make_task(recurrence="once", start_date=date(2024, 3, 12), time=None, duration_minutes=0)
    [occurrence] = expand_task_occurrences([task], date(2024, 3, 1), date(2024, 3, 31))
    assert occurrence.id == "task_t1_2024-03-12"
    assert occurrence.start == datetime(2024, 3, 12, 9, 0)
    assert occurrence.end - occurrence.start == timedelta(minutes=30)
    assert occurrence.type == "Task"
    assert occurrence.meta == {"task_id": "t1", "date_key": "2024-03-12"}
    assert occurrence.is_completed is False


def test_expanded_occurrences_reflect_time_and_completion():
    task = make_task(time="18:15", duration_minutes=45, completion_history=["2024-03-06"], color="#3b82f6")
    occurrences = expand_task_occurrences([task], date(2024, 3, 5), date(2024, 3, 7))
    assert [o.start for o in occurrences] == [datetime(2024, 3, d, 18, 15) for d in (5, 6, 7)]
    assert occurrences[0].end == datetime(2024, 3, 5, 19, 0)
    assert [o.is_completed for o in occurrences] == [False, True, False]
    assert occurrences[0].color == "#3b82f6"


def test_malformed_time_falls_back_to_default():
    task = make_task(recurrence="once", time="quarter past")
    [occurrence] = expand_task_occurrences([task], date(2024, 3, 1), date(2024, 3, 31))
    assert occurrence.start == datetime(2024, 3, 5, 9, 0)
