from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...leave.model import LeaveRequest
from ..model import ClockSummary


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide the status of one grid cell."""

    @abstractmethod
    def decide(
        self,
        *,
        work_date: date,
        today: date,
        clock: Optional[ClockSummary],
        local_clock_in: Optional[datetime],
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        raise NotImplementedError
