from datetime import date, datetime

from attendance_payroll.attendance.factory import AttendanceStrategyFactory
from attendance_payroll.attendance.model import ClockSummary
from attendance_payroll.attendance.strategies.clocked_strategy import ClockedDayStrategy
from attendance_payroll.attendance.strategies.unclocked_strategy import UnclockedDayStrategy
from attendance_payroll.core.enums import AttendanceStatus, RequestStatus
from attendance_payroll.leave.model import LeaveRequest

TUESDAY = date(2024, 9, 10)
SATURDAY = date(2024, 9, 14)


def _clock(clock_in: datetime, clock_out, hours: float) -> ClockSummary:
    return ClockSummary(user_id=1, work_date=clock_in.date(), clock_in=clock_in, clock_out=clock_out, total_hours=hours)


def _decide_clocked(clock: ClockSummary, local_in: datetime) -> AttendanceStatus:
    decision = ClockedDayStrategy().decide(
        work_date=clock.work_date,
        today=date(2024, 9, 30),
        clock=clock,
        local_clock_in=local_in,
        leave=None,
    )
    return decision.status


def test_factory_picks_clocked_strategy_when_clock_in_exists():
    factory = AttendanceStrategyFactory()
    clock = _clock(datetime(2024, 9, 10, 9, 0), None, 0)

    assert isinstance(factory.for_day(clock=clock), ClockedDayStrategy)
    assert isinstance(factory.for_day(clock=None), UnclockedDayStrategy)


def test_full_day_before_cutoff_is_present():
    start = datetime(2024, 9, 10, 9, 0)
    clock = _clock(start, datetime(2024, 9, 10, 18, 30), 9.5)

    assert _decide_clocked(clock, start) == AttendanceStatus.PRESENT


def test_clock_in_after_cutoff_is_half_day_even_with_full_hours():
    start = datetime(2024, 9, 11, 11, 30)
    clock = _clock(start, datetime(2024, 9, 11, 21, 0), 9.5)

    assert _decide_clocked(clock, start) == AttendanceStatus.HALF_DAY


def test_clock_in_exactly_at_cutoff_is_not_late():
    start = datetime(2024, 9, 11, 11, 0)
    clock = _clock(start, datetime(2024, 9, 11, 20, 0), 9)

    assert _decide_clocked(clock, start) == AttendanceStatus.PRESENT


def test_hours_between_four_and_eight_is_half_day():
    start = datetime(2024, 9, 10, 9, 0)
    clock = _clock(start, datetime(2024, 9, 10, 14, 0), 5)

    assert _decide_clocked(clock, start) == AttendanceStatus.HALF_DAY


def test_short_positive_hours_is_present():
    start = datetime(2024, 9, 10, 9, 0)
    clock = _clock(start, datetime(2024, 9, 10, 11, 0), 2)

    assert _decide_clocked(clock, start) == AttendanceStatus.PRESENT


def test_open_shift_without_clock_out_is_present():
    start = datetime(2024, 9, 10, 9, 0)
    clock = _clock(start, None, 0)

    assert _decide_clocked(clock, start) == AttendanceStatus.PRESENT


def test_closed_shift_with_zero_hours_is_absent():
    start = datetime(2024, 9, 10, 9, 0)
    clock = _clock(start, start, 0)

    assert _decide_clocked(clock, start) == AttendanceStatus.ABSENT


def test_unclocked_rules_in_order():
    strategy = UnclockedDayStrategy()
    leave = LeaveRequest(
        request_id=1,
        user_id=1,
        start_date=SATURDAY,
        end_date=SATURDAY,
        leave_type="Sick Leave",
        status=RequestStatus.APPROVED,
    )
    today = date(2024, 9, 12)

    def decide(d, lv=None):
        return strategy.decide(work_date=d, today=today, clock=None, local_clock_in=None, leave=lv).status

    assert decide(SATURDAY, leave) == AttendanceStatus.ON_LEAVE
    assert decide(SATURDAY) == AttendanceStatus.WEEK_OFF
    assert decide(TUESDAY) == AttendanceStatus.ABSENT
    assert decide(today) == AttendanceStatus.UPCOMING
    assert decide(date(2024, 9, 13)) == AttendanceStatus.UPCOMING
