from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import date, datetime
from typing import List, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_date_range
from ..core.constants import BALANCE_TOLERANCE, DEFAULT_HISTORY_LIMIT
from ..core.enums import LeaveSession, LeaveType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .accrual import LeaveAccrualCalculator
from .financial_year import FinancialYear
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_FY_LABEL = re.compile(r"^(\d{4})-(\d{4})$")


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        users: UserRepository,
        *,
        calculator: Optional[LeaveAccrualCalculator] = None,
    ):
        self._leaves = leaves
        self._users = users
        self._calculator = calculator or LeaveAccrualCalculator()

    # -------- Balances --------
    def get_leave_balances(self, user_id: int, *, now: Optional[datetime] = None) -> List[LeaveBalance]:
        """Reconcile the current-FY privilege-leave row and return every balance of the user."""
        if self._users.get_by_id(int(user_id)) is None:
            raise NotFoundError("Employee not found")

        today = (now or now_local()).date()
        balances = list(self._leaves.list_balances(user_id=int(user_id)))

        join_date = self._users.get_join_date(int(user_id))
        if join_date is None:
            return balances

        result = self._calculator.calculate(join_date=join_date, today=today)
        fy_label = result.financial_year.label

        for idx, bal in enumerate(balances):
            if bal.financial_year != fy_label or bal.canonical_type != LeaveType.PRIVILEGE:
                continue

            expected = bal.opening_balance + result.accrued - bal.availed - bal.lapse
            if abs(expected - bal.balance) > BALANCE_TOLERANCE:
                logger.info(
                    "Reconciling leave balance user_id=%s fy=%s stored=%.2f computed=%.2f",
                    user_id,
                    fy_label,
                    bal.balance,
                    expected,
                )
                saved = self._leaves.upsert_balance(replace(bal, balance=expected))
                balances[idx] = replace(saved, is_probation=result.is_probation)
            else:
                balances[idx] = replace(bal, is_probation=result.is_probation)
            return balances

        created = self._leaves.upsert_balance(
            LeaveBalance(
                user_id=int(user_id),
                leave_type=LeaveType.PRIVILEGE.value,
                financial_year=fy_label,
                opening_balance=0.0,
                availed=0.0,
                lapse=0.0,
                balance=result.accrued,
            )
        )
        balances.append(replace(created, is_probation=result.is_probation))
        return balances

    def set_leave_balance(
        self,
        *,
        current_role: Role,
        user_id: int,
        leave_type: str,
        financial_year: str,
        opening_balance: float,
        availed: float = 0.0,
        lapse: float = 0.0,
        lapse_date: Optional[date] = None,
    ) -> LeaveBalance:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit leave balances")
        if not leave_type or not str(leave_type).strip():
            raise ValidationError("Leave type is required")

        m = _FY_LABEL.match(str(financial_year or "").strip())
        if not m or int(m.group(2)) != int(m.group(1)) + 1:
            raise ValidationError("Financial year must look like YYYY-YYYY")

        try:
            opening = float(opening_balance)
            used = float(availed or 0)
            lapsed = float(lapse or 0)
        except (TypeError, ValueError):
            raise ValidationError("Balance figures must be numbers")

        if self._users.get_by_id(int(user_id)) is None:
            raise NotFoundError("Employee not found")

        return self._leaves.upsert_balance(
            LeaveBalance(
                user_id=int(user_id),
                leave_type=str(leave_type).strip(),
                financial_year=m.group(0),
                opening_balance=opening,
                availed=used,
                lapse=lapsed,
                lapse_date=lapse_date,
                balance=opening - used - lapsed,
            )
        )

    # -------- Requests --------
    def create_leave_request(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        leave_type: str,
        reason: Optional[str] = None,
        session: str = LeaveSession.FULL_DAY.value,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        require_date_range(start_date, end_date)
        if not leave_type or not str(leave_type).strip():
            raise ValidationError("Leave type is required")
        try:
            leave_session = LeaveSession(session or LeaveSession.FULL_DAY.value)
        except ValueError:
            raise ValidationError("Session must be Full Day, First Half or Second Half")

        if LeaveType.resolve(leave_type) == LeaveType.PRIVILEGE:
            requested = 0.5 if leave_session.is_half else float((end_date - start_date).days + 1)
            available = self._available_privilege_balance(int(user_id), now=now)
            if requested > available:
                raise ValidationError(
                    f"Insufficient leave balance. Available: {available:.2f}, Requested: {requested:g}"
                )

        return self._leaves.create_request(
            user_id=int(user_id),
            start_date=start_date,
            end_date=end_date,
            leave_type=str(leave_type).strip(),
            reason=(reason or "").strip() or None,
            session=leave_session.value,
        )

    def _available_privilege_balance(self, user_id: int, *, now: Optional[datetime]) -> float:
        today = (now or now_local()).date()
        fy_label = FinancialYear.containing(today).label
        for bal in self.get_leave_balances(user_id, now=now):
            if bal.financial_year == fy_label and bal.canonical_type == LeaveType.PRIVILEGE:
                return bal.balance
        return 0.0

    def decide_leave_request(
        self,
        *,
        current_role: Role,
        request_id: int,
        status: RequestStatus,
        reviewed_by: int,
        admin_notes: Optional[str] = None,
    ) -> LeaveRequest:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can decide leave requests")
        if status not in (RequestStatus.APPROVED, RequestStatus.REJECTED):
            raise ValidationError("Status must be approved or rejected")

        req = self._leaves.get_request(request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Leave request has already been decided")

        decided = self._leaves.decide_request(
            request_id=int(request_id),
            status=status,
            reviewed_by=int(reviewed_by),
            admin_notes=(admin_notes or "").strip() or None,
        )
        if not decided:
            raise NotFoundError("Leave request not found")
        return decided

    def get_leave_history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[LeaveRequest]:
        return self._leaves.list_history(user_id=int(user_id), limit=int(limit))
