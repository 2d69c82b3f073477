from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    start_date: date
    end_date: date
    leave_type: str
    status: RequestStatus
    session: str = "Full Day"
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    admin_notes: Optional[str] = None

    @property
    def canonical_type(self) -> Optional[LeaveType]:
        return LeaveType.resolve(self.leave_type)

    def covered_dates(self, *, clip_start: Optional[date] = None, clip_end: Optional[date] = None) -> Iterator[date]:
        """Every calendar day of the request, inclusive. Session is not consulted."""
        d = max(self.start_date, clip_start) if clip_start else self.start_date
        end = min(self.end_date, clip_end) if clip_end else self.end_date
        while d <= end:
            yield d
            d += timedelta(days=1)

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "user_id": self.user_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "leave_type": self.leave_type,
            "session": self.session,
            "reason": self.reason,
            "status": self.status.value,
            "reviewed_by": self.reviewed_by,
            "reviewed_at": self.reviewed_at.isoformat() if self.reviewed_at else None,
            "admin_notes": self.admin_notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class LeaveBalance:
    """One (user, leave type, financial year) balance row.

    `is_probation` is computed on read and is not persisted.
    """

    user_id: int
    leave_type: str
    financial_year: str
    opening_balance: float = 0.0
    availed: float = 0.0
    lapse: float = 0.0
    balance: float = 0.0
    balance_id: Optional[int] = None
    lapse_date: Optional[date] = None
    is_probation: Optional[bool] = None

    @property
    def canonical_type(self) -> Optional[LeaveType]:
        return LeaveType.resolve(self.leave_type)

    def to_dict(self) -> dict:
        return {
            "id": self.balance_id,
            "user_id": self.user_id,
            "leave_type": self.leave_type,
            "financial_year": self.financial_year,
            "opening_balance": self.opening_balance,
            "availed": self.availed,
            "lapse": self.lapse,
            "lapse_date": self.lapse_date.isoformat() if self.lapse_date else None,
            "balance": round(self.balance, 2),
            "is_probation": self.is_probation,
        }
