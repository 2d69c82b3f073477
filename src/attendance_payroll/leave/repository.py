from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LeaveBalance, LeaveRequest


class LeaveRepository(Protocol):
    # -------- Leave requests --------
    def list_approved_between(self, *, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        """Approved requests overlapping [start_date, end_date], oldest start first."""

        raise NotImplementedError

    def create_request(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        leave_type: str,
        reason: Optional[str],
        session: str,
    ) -> LeaveRequest:
        raise NotImplementedError

    def get_request(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def decide_request(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        reviewed_by: int,
        admin_notes: Optional[str] = None,
    ) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_history(self, *, user_id: int, limit: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    # -------- Balances --------
    def list_balances(self, *, user_id: int) -> Sequence[LeaveBalance]:
        raise NotImplementedError

    def upsert_balance(self, balance: LeaveBalance) -> LeaveBalance:
        """Insert-or-update keyed by (user_id, leave_type, financial_year)."""

        raise NotImplementedError
