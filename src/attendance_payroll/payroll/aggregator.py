from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable

from ..common.datetime_utils import is_weekend
from ..core.enums import AttendanceStatus, LeaveType
from ..attendance.model import AttendanceDay
from .model import AttendanceTally

ONE = Decimal("1")
HALF = Decimal("0.5")


def tally_attendance(days: Iterable[AttendanceDay]) -> Dict[int, AttendanceTally]:
    """Fold a month of classified days into paid/LOP counts per employee.

    Days classified week_off or upcoming carry no clock or leave record: a weekend
    day is paid, a weekday is loss of pay.
    """
    tallies: Dict[int, AttendanceTally] = {}

    for day in days:
        t = tallies.get(day.user_id)
        if t is None:
            t = AttendanceTally(user_id=day.user_id, full_name=day.full_name, email=day.email)
            tallies[day.user_id] = t

        if day.status == AttendanceStatus.PRESENT:
            t.paid_days += ONE
            t.present_days += 1
        elif day.status == AttendanceStatus.HALF_DAY:
            t.paid_days += HALF
            t.lop_days += HALF
            t.half_days += 1
        elif day.status == AttendanceStatus.ON_LEAVE:
            t.leave_days += 1
            if LeaveType.resolve(day.leave_type) == LeaveType.UNPAID:
                t.lop_days += ONE
                t.unpaid_leave_days += 1
            else:
                t.paid_days += ONE
        elif day.status == AttendanceStatus.ABSENT:
            t.lop_days += ONE
            t.absent_days += 1
        elif is_weekend(day.date):
            t.paid_days += ONE
            t.week_off_days += 1
        else:
            t.lop_days += ONE
            t.absent_days += 1

    return tallies
