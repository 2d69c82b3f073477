from datetime import date, datetime
from types import GeneratorType

import pytest

from attendance_payroll.attendance.model import ClockSummary
from attendance_payroll.attendance.service import AttendanceService
from attendance_payroll.core.enums import AttendanceStatus, RequestStatus
from attendance_payroll.core.exceptions import ValidationError
from attendance_payroll.leave.model import LeaveRequest
from attendance_payroll.users.model import Employee

from fakes import InMemoryAttendance, InMemoryLeaves, InMemoryUsers


def _employees():
    return [
        Employee(user_id=2, email="zed@example.com", full_name="zed"),
        Employee(user_id=1, email="amy@example.com", full_name="Amy"),
        Employee(user_id=3, email="bob@example.com", full_name=None),
    ]


def _service(*, summaries=(), requests=(), employees=None, default_timezone="UTC"):
    return AttendanceService(
        InMemoryAttendance(list(summaries)),
        InMemoryUsers(employees if employees is not None else _employees()),
        InMemoryLeaves(requests=list(requests)),
        default_timezone=default_timezone,
        storage_timezone="UTC",
    )


def test_grid_is_dense_and_ordered_by_date_desc_then_name():
    svc = _service()
    rows = list(svc.classify_range(date(2024, 9, 9), date(2024, 9, 11), today=date(2024, 9, 30)))

    assert len(rows) == 3 * 3
    assert len({(r.user_id, r.date) for r in rows}) == 9
    assert [r.date for r in rows[:3]] == [date(2024, 9, 11)] * 3
    assert rows[-1].date == date(2024, 9, 9)
    # "Amy", then "bob@example.com" (no full name), then "zed"; case-insensitive.
    assert [r.user_id for r in rows[:3]] == [1, 3, 2]


def test_grid_is_produced_lazily():
    svc = _service()
    rows = svc.classify_range(date(2024, 9, 1), date(2024, 9, 30), today=date(2024, 9, 30))

    assert isinstance(rows, GeneratorType)
    first = next(rows)
    assert first.date == date(2024, 9, 30)


def test_inverted_range_is_rejected_before_iteration():
    svc = _service()

    with pytest.raises(ValidationError):
        svc.classify_range(date(2024, 9, 2), date(2024, 9, 1))


def test_clocked_day_carries_clock_fields():
    clock = ClockSummary(
        user_id=1,
        work_date=date(2024, 9, 10),
        clock_in=datetime(2024, 9, 10, 9, 0),
        clock_out=datetime(2024, 9, 10, 18, 30),
        total_hours=9.5,
        shift_type="Morning",
    )
    svc = _service(summaries=[clock])
    rows = list(svc.classify_range(date(2024, 9, 10), date(2024, 9, 10), today=date(2024, 9, 30)))
    amy = next(r for r in rows if r.user_id == 1)

    assert amy.status == AttendanceStatus.PRESENT
    assert amy.clock_in == clock.clock_in
    assert amy.clock_out == clock.clock_out
    assert amy.total_hours == 9.5
    assert amy.shift_type == "Morning"
    # Everyone else was simply absent that past weekday.
    assert {r.status for r in rows if r.user_id != 1} == {AttendanceStatus.ABSENT}


def test_late_cutoff_is_read_in_employee_time_zone():
    # 06:00 UTC is 11:30 in Asia/Kolkata.
    late = ClockSummary(
        user_id=1,
        work_date=date(2024, 9, 11),
        clock_in=datetime(2024, 9, 11, 6, 0),
        clock_out=datetime(2024, 9, 11, 15, 0),
        total_hours=9,
    )
    # 04:00 UTC is 09:30 in Asia/Kolkata.
    on_time = ClockSummary(
        user_id=2,
        work_date=date(2024, 9, 11),
        clock_in=datetime(2024, 9, 11, 4, 0),
        clock_out=datetime(2024, 9, 11, 13, 0),
        total_hours=9,
    )
    employees = [
        Employee(user_id=1, email="amy@example.com", full_name="Amy"),
        Employee(user_id=2, email="zed@example.com", full_name="Zed", timezone="UTC"),
    ]
    svc = _service(summaries=[late, on_time], employees=employees, default_timezone="Asia/Kolkata")
    rows = {r.user_id: r for r in svc.classify_range(date(2024, 9, 11), date(2024, 9, 11), today=date(2024, 9, 30))}

    assert rows[1].status == AttendanceStatus.HALF_DAY
    assert rows[2].status == AttendanceStatus.PRESENT


def test_approved_leave_covers_every_day_and_attaches_type():
    leave = LeaveRequest(
        request_id=7,
        user_id=1,
        start_date=date(2024, 9, 6),
        end_date=date(2024, 9, 9),
        leave_type="Sick Leave",
        status=RequestStatus.APPROVED,
        session="First Half",
    )
    pending = LeaveRequest(
        request_id=8,
        user_id=2,
        start_date=date(2024, 9, 9),
        end_date=date(2024, 9, 9),
        leave_type="Sick Leave",
        status=RequestStatus.PENDING,
    )
    svc = _service(requests=[leave, pending])
    rows = [
        r
        for r in svc.classify_range(date(2024, 9, 5), date(2024, 9, 10), today=date(2024, 9, 30))
        if r.user_id in (1, 2)
    ]
    amy = {r.date: r for r in rows if r.user_id == 1}
    zed = {r.date: r for r in rows if r.user_id == 2}

    for d in (date(2024, 9, 6), date(2024, 9, 7), date(2024, 9, 8), date(2024, 9, 9)):
        assert amy[d].status == AttendanceStatus.ON_LEAVE
        assert amy[d].leave_type == "Sick Leave"
        assert amy[d].leave_session == "First Half"
    assert amy[date(2024, 9, 5)].status == AttendanceStatus.ABSENT
    assert amy[date(2024, 9, 10)].leave_type is None
    assert zed[date(2024, 9, 9)].status == AttendanceStatus.ABSENT


def test_clock_in_wins_over_approved_leave():
    leave = LeaveRequest(
        request_id=1,
        user_id=1,
        start_date=date(2024, 9, 10),
        end_date=date(2024, 9, 10),
        leave_type="Casual Leave",
        status=RequestStatus.APPROVED,
    )
    clock = ClockSummary(
        user_id=1,
        work_date=date(2024, 9, 10),
        clock_in=datetime(2024, 9, 10, 9, 0),
        clock_out=datetime(2024, 9, 10, 18, 0),
        total_hours=9,
    )
    svc = _service(summaries=[clock], requests=[leave])
    amy = next(
        r
        for r in svc.classify_range(date(2024, 9, 10), date(2024, 9, 10), today=date(2024, 9, 30))
        if r.user_id == 1
    )

    assert amy.status == AttendanceStatus.PRESENT
    assert amy.leave_type == "Casual Leave"


def test_weekend_past_and_future_days():
    svc = _service(employees=[Employee(user_id=1, email="amy@example.com", full_name="Amy")])
    rows = {r.date: r.status for r in svc.classify_range(date(2024, 9, 13), date(2024, 9, 17), today=date(2024, 9, 16))}

    assert rows[date(2024, 9, 13)] == AttendanceStatus.ABSENT
    assert rows[date(2024, 9, 14)] == AttendanceStatus.WEEK_OFF
    assert rows[date(2024, 9, 15)] == AttendanceStatus.WEEK_OFF
    assert rows[date(2024, 9, 16)] == AttendanceStatus.UPCOMING
    assert rows[date(2024, 9, 17)] == AttendanceStatus.UPCOMING


def test_monthly_report_covers_the_calendar_month():
    svc = _service()
    rows = svc.get_monthly_report(2, 2024, today=date(2024, 3, 1))

    assert len(rows) == 29 * 3
    assert rows[0].date == date(2024, 2, 29)
    assert rows[-1].date == date(2024, 2, 1)


def test_monthly_report_rejects_bad_month():
    svc = _service()

    with pytest.raises(ValidationError):
        svc.get_monthly_report(13, 2024)
