from datetime import date, datetime, timezone

from attendance_payroll.attendance.clock_days import summarize_by_local_day
from attendance_payroll.attendance.model import ClockEvent


def _summarize(events, *, start=date(2024, 9, 9), end=date(2024, 9, 10), roster=None):
    return summarize_by_local_day(
        events,
        start=start,
        end=end,
        default_timezone="Asia/Kolkata",
        storage_zone=timezone.utc,
        roster=roster,
    )


def test_early_local_clock_in_lands_on_the_local_date():
    # 23:40 UTC on the 9th is 05:10 on the 10th in Kolkata.
    events = [ClockEvent(user_id=1, clock_in=datetime(2024, 9, 9, 23, 40), clock_out=None, total_hours=0.0)]

    rows = _summarize(events)

    assert [(r.user_id, r.work_date) for r in rows] == [(1, date(2024, 9, 10))]


def test_events_on_one_local_day_are_folded_together():
    events = [
        ClockEvent(user_id=1, clock_in=datetime(2024, 9, 9, 23, 40), clock_out=datetime(2024, 9, 10, 3, 0), total_hours=3.0),
        ClockEvent(user_id=1, clock_in=datetime(2024, 9, 10, 4, 0), clock_out=datetime(2024, 9, 10, 9, 0), total_hours=5.0),
    ]

    (row,) = _summarize(events, roster={(1, date(2024, 9, 10)): "Morning"})

    assert row.work_date == date(2024, 9, 10)
    assert row.clock_in == datetime(2024, 9, 9, 23, 40)
    assert row.clock_out == datetime(2024, 9, 10, 9, 0)
    assert row.total_hours == 8.0
    assert row.shift_type == "Morning"


def test_employee_zone_overrides_default_and_out_of_range_days_drop():
    events = [
        ClockEvent(user_id=2, clock_in=datetime(2024, 9, 9, 23, 40), clock_out=None, total_hours=0.0, timezone="UTC"),
        ClockEvent(user_id=3, clock_in=datetime(2024, 9, 10, 20, 0), clock_out=None, total_hours=0.0),
    ]

    rows = _summarize(events)

    # user 3 is at 01:30 on the 11th locally, outside the range.
    assert [(r.user_id, r.work_date) for r in rows] == [(2, date(2024, 9, 9))]
