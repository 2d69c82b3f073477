from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import PayslipStatus
from .model import Payslip, PayslipDraft


class PayslipRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[Payslip]:
        raise NotImplementedError

    def get_for_period(self, *, user_id: int, month: int, year: int) -> Optional[Payslip]:
        raise NotImplementedError

    def save(self, draft: PayslipDraft) -> Payslip:
        """Insert-or-update keyed by (user_id, month, year), or by record_id when the draft has one.

        Null identifiers keep the stored value; status is kept once the row is locked.
        """

        raise NotImplementedError

    def mark_released(self, *, record_id: int, released_by: int) -> Optional[Payslip]:
        raise NotImplementedError

    def mark_locked(self, *, record_id: int) -> Optional[Payslip]:
        raise NotImplementedError

    def list_all(
        self,
        *,
        user_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        status: Optional[PayslipStatus] = None,
        limit: int = 500,
    ) -> Sequence[Payslip]:
        raise NotImplementedError


class SalaryRepository(Protocol):
    def get_base_salary(self, user_id: int) -> Optional[Decimal]:
        """PF base salary on record, or None."""

        raise NotImplementedError
