from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...common.datetime_utils import is_weekend
from ...core.enums import AttendanceStatus
from ...leave.model import LeaveRequest
from ..model import ClockSummary
from .base import AttendanceStrategy, StatusDecision


class UnclockedDayStrategy(AttendanceStrategy):
    """Day without clock activity: leave, then weekend, then past/future."""

    def decide(
        self,
        *,
        work_date: date,
        today: date,
        clock: Optional[ClockSummary],
        local_clock_in: Optional[datetime],
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        if leave is not None:
            return StatusDecision(AttendanceStatus.ON_LEAVE)
        if is_weekend(work_date):
            return StatusDecision(AttendanceStatus.WEEK_OFF)
        if work_date < today:
            return StatusDecision(AttendanceStatus.ABSENT)
        return StatusDecision(AttendanceStatus.UPCOMING)
