from __future__ import annotations

from datetime import date, tzinfo
from typing import Dict, Iterator, List, Optional, Tuple

from ..common.datetime_utils import get_zone, iter_dates_desc, month_bounds, now_local, to_zone
from ..common.validators import require_date_range, require_month, require_year
from ..core.constants import DEFAULT_ATTENDANCE_TIMEZONE, DEFAULT_CLOCK_STORAGE_TIMEZONE
from ..leave.model import LeaveRequest
from ..leave.repository import LeaveRepository
from ..users.model import Employee
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceDay, ClockSummary
from .repository import AttendanceRepository

CellKey = Tuple[int, date]


class AttendanceService:
    """Classifies every (employee, date) cell from clock events, roster and approved leave."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        leaves: LeaveRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        default_timezone: str = DEFAULT_ATTENDANCE_TIMEZONE,
        storage_timezone: str = DEFAULT_CLOCK_STORAGE_TIMEZONE,
    ):
        self._attendance = attendance
        self._users = users
        self._leaves = leaves
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._default_timezone = default_timezone
        self._storage_zone = get_zone(storage_timezone, "UTC")

    def classify_range(self, start: date, end: date, *, today: date | None = None) -> Iterator[AttendanceDay]:
        """Dense grid for [start, end], newest date first, employees by display name.

        Store reads happen up front; cells are produced lazily one date at a time.
        """
        require_date_range(start, end)
        today = today or now_local().date()

        employees = sorted(self._users.list_employees(), key=lambda e: (e.display_name.casefold(), e.user_id))

        clocks: Dict[CellKey, ClockSummary] = {}
        for c in self._attendance.get_clock_summaries(start_date=start, end_date=end):
            clocks.setdefault((c.user_id, c.work_date), c)

        leaves = self._leave_coverage(start, end)
        zones = {e.user_id: get_zone(e.timezone, self._default_timezone) for e in employees}

        return self._iter_grid(start, end, today=today, employees=employees, clocks=clocks, leaves=leaves, zones=zones)

    def get_monthly_report(self, month: int, year: int, *, today: date | None = None) -> List[AttendanceDay]:
        month = require_month(month)
        year = require_year(year)
        start, end = month_bounds(year, month)
        return list(self.classify_range(start, end, today=today))

    def _leave_coverage(self, start: date, end: date) -> Dict[CellKey, LeaveRequest]:
        # Requests arrive oldest start first; an earlier request keeps the day when two overlap.
        coverage: Dict[CellKey, LeaveRequest] = {}
        for req in self._leaves.list_approved_between(start_date=start, end_date=end):
            for d in req.covered_dates(clip_start=start, clip_end=end):
                coverage.setdefault((req.user_id, d), req)
        return coverage

    def _iter_grid(
        self,
        start: date,
        end: date,
        *,
        today: date,
        employees: List[Employee],
        clocks: Dict[CellKey, ClockSummary],
        leaves: Dict[CellKey, LeaveRequest],
        zones: Dict[int, tzinfo],
    ) -> Iterator[AttendanceDay]:
        for d in iter_dates_desc(start, end):
            for emp in employees:
                key = (emp.user_id, d)
                yield self._classify(
                    emp,
                    d,
                    today=today,
                    clock=clocks.get(key),
                    leave=leaves.get(key),
                    zone=zones[emp.user_id],
                )

    def _classify(
        self,
        emp: Employee,
        work_date: date,
        *,
        today: date,
        clock: Optional[ClockSummary],
        leave: Optional[LeaveRequest],
        zone: tzinfo,
    ) -> AttendanceDay:
        local_clock_in = None
        if clock is not None and clock.clock_in is not None:
            local_clock_in = to_zone(clock.clock_in, zone, naive_as=self._storage_zone)

        strategy = self._factory.for_day(clock=clock)
        decision = strategy.decide(
            work_date=work_date,
            today=today,
            clock=clock,
            local_clock_in=local_clock_in,
            leave=leave,
        )

        return AttendanceDay(
            user_id=emp.user_id,
            full_name=emp.full_name,
            email=emp.email,
            date=work_date,
            status=decision.status,
            clock_in=clock.clock_in if clock else None,
            clock_out=clock.clock_out if clock else None,
            total_hours=clock.total_hours if clock else 0.0,
            shift_type=clock.shift_type if clock else None,
            leave_type=leave.leave_type if leave else None,
            leave_session=leave.session if leave else None,
        )
