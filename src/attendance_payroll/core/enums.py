from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Derived per-day attendance status. Never stored."""

    PRESENT = "present"
    HALF_DAY = "half_day"
    ABSENT = "absent"
    ON_LEAVE = "on_leave"
    WEEK_OFF = "week_off"
    UPCOMING = "upcoming"


class RequestStatus(str, Enum):
    """Leave request approval workflow."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveSession(str, Enum):
    FULL_DAY = "Full Day"
    FIRST_HALF = "First Half"
    SECOND_HALF = "Second Half"

    @property
    def is_half(self) -> bool:
        return self in (LeaveSession.FIRST_HALF, LeaveSession.SECOND_HALF)


class LeaveType(str, Enum):
    """Canonical leave types. Stored labels are resolved through aliases."""

    PRIVILEGE = "Privilege Leave"
    SICK = "Sick Leave"
    CASUAL = "Casual Leave"
    UNPAID = "Unpaid Leave"

    @classmethod
    def resolve(cls, label: Optional[str]) -> Optional["LeaveType"]:
        if not label:
            return None
        return _LEAVE_TYPE_ALIASES.get(label.strip().lower())


_LEAVE_TYPE_ALIASES = {
    "privilege leave": LeaveType.PRIVILEGE,
    "paid leave": LeaveType.PRIVILEGE,
    "pl": LeaveType.PRIVILEGE,
    "sick leave": LeaveType.SICK,
    "casual leave": LeaveType.CASUAL,
    "unpaid leave": LeaveType.UNPAID,
}


class PayslipStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    RELEASED = "released"
    LOCKED = "locked"


class AuditAction(str, Enum):
    PAYSLIP_CREATED = "payslip_created"
    PAYSLIP_UPDATED = "payslip_updated"
    PAYSLIP_RELEASED = "payslip_released"
    PAYSLIP_LOCKED = "payslip_locked"
