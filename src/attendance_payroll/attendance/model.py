from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class ClockEvent:
    """One stored clock-in/clock-out pair; timestamps as stored."""

    user_id: int
    clock_in: datetime
    clock_out: Optional[datetime]
    total_hours: float
    timezone: Optional[str] = None


@dataclass(frozen=True)
class ClockSummary:
    """Clock events of one employee on one local day."""

    user_id: int
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime]
    total_hours: float
    shift_type: Optional[str] = None


@dataclass(frozen=True)
class AttendanceDay:
    """Read-model: one classified cell of the (employee x date) grid.

    Derived on every call from clock events, roster and approved leave; never stored.
    """

    user_id: int
    full_name: Optional[str]
    email: str
    date: date
    status: AttendanceStatus
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    total_hours: float = 0.0
    shift_type: Optional[str] = None
    leave_type: Optional[str] = None
    leave_session: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "email": self.email,
            "date": self.date.isoformat(),
            "status": self.status.value,
            "clock_in": self.clock_in.isoformat() if self.clock_in else None,
            "clock_out": self.clock_out.isoformat() if self.clock_out else None,
            "total_hours": round(self.total_hours, 2),
            "shift_type": self.shift_type,
            "leave_type": self.leave_type,
            "leave_session": self.leave_session,
        }
