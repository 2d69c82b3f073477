from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ...core.constants import FULL_DAY_HOURS, HALF_DAY_HOURS, LATE_ARRIVAL_CUTOFF
from ...core.enums import AttendanceStatus
from ...leave.model import LeaveRequest
from ..model import ClockSummary
from .base import AttendanceStrategy, StatusDecision


class ClockedDayStrategy(AttendanceStrategy):
    """Day with at least one clock-in. Rules are ordered; the first match wins."""

    def __init__(
        self,
        *,
        late_cutoff: time = LATE_ARRIVAL_CUTOFF,
        full_day_hours: float = FULL_DAY_HOURS,
        half_day_hours: float = HALF_DAY_HOURS,
    ):
        self._late_cutoff = late_cutoff
        self._full_day_hours = float(full_day_hours)
        self._half_day_hours = float(half_day_hours)

    def decide(
        self,
        *,
        work_date: date,
        today: date,
        clock: Optional[ClockSummary],
        local_clock_in: Optional[datetime],
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        if clock is None:
            raise ValueError("ClockedDayStrategy needs a clock summary")

        hours = clock.total_hours or 0.0
        if local_clock_in is not None and local_clock_in.time() > self._late_cutoff:
            return StatusDecision(AttendanceStatus.HALF_DAY, note="late arrival")
        if hours >= self._full_day_hours:
            return StatusDecision(AttendanceStatus.PRESENT)
        if hours >= self._half_day_hours:
            return StatusDecision(AttendanceStatus.HALF_DAY)
        if hours > 0:
            return StatusDecision(AttendanceStatus.PRESENT)
        if clock.clock_out is None:
            return StatusDecision(AttendanceStatus.PRESENT, note="open shift")
        return StatusDecision(AttendanceStatus.ABSENT)
