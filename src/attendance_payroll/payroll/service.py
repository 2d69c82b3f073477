from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import List, Optional, Sequence

from ..attendance.service import AttendanceService
from ..audit.service import AuditTrail
from ..common.datetime_utils import days_in_month
from ..common.validators import require_month, require_year
from ..core.constants import DEFAULT_BASE_SALARY
from ..core.enums import AuditAction, PayslipStatus
from ..core.exceptions import LockedPayslipError, NotFoundError, UpstreamUnavailableError, ValidationError
from .aggregator import tally_attendance
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import AttendanceTally, BatchFailure, GenerationReport, Payslip, PayslipDraft
from .repository import PayslipRepository, SalaryRepository
from .state_machine import PayslipStateMachine

logger = logging.getLogger(__name__)

ENTITY_TYPE = "payslip"


class PayslipService:
    def __init__(
        self,
        payslips: PayslipRepository,
        salaries: SalaryRepository,
        attendance: AttendanceService,
        audit: AuditTrail,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payslips = payslips
        self._salaries = salaries
        self._attendance = attendance
        self._audit = audit
        self._calculator = calculator or StandardPayrollCalculator()

    # -------- Generation --------
    def generate_from_attendance(
        self,
        month: int,
        year: int,
        generated_by: int,
        *,
        target_user_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> GenerationReport:
        """Draft one payslip per employee from the month's classified attendance.

        A failure for one employee is logged and reported; the rest of the batch goes on.
        A lost database connection aborts the whole batch.
        """
        month = require_month(month)
        year = require_year(year)
        logger.info("Generating payslips month=%s year=%s target=%s", month, year, target_user_id)

        tallies = tally_attendance(self._attendance.get_monthly_report(month, year, today=today))
        targets = [int(target_user_id)] if target_user_id is not None else list(tallies)
        total_days = days_in_month(year, month)

        payslips: List[Payslip] = []
        failures: List[BatchFailure] = []
        for user_id in targets:
            tally = tallies.get(user_id)
            if tally is None:
                logger.warning("No attendance found for user_id=%s in %s/%s, skipping", user_id, month, year)
                continue
            try:
                draft = self._draft_from_tally(tally, month=month, year=year, total_days=total_days)
                payslips.append(self.upsert_payslip(draft, actor_id=generated_by, allow_admin_override=True))
            except UpstreamUnavailableError:
                raise
            except Exception as e:
                logger.exception("Payslip generation failed for user_id=%s", user_id)
                failures.append(BatchFailure(user_id=user_id, reason=str(e)))

        logger.info(
            "Generated payslips month=%s year=%s ok=%s failed=%s",
            month,
            year,
            len(payslips),
            len(failures),
        )
        return GenerationReport(month=month, year=year, payslips=payslips, failures=failures)

    def _draft_from_tally(self, tally: AttendanceTally, *, month: int, year: int, total_days: int) -> PayslipDraft:
        base_salary = self._salaries.get_base_salary(tally.user_id) or DEFAULT_BASE_SALARY
        salary = self._calculator.compute(base_salary=base_salary, paid_days=tally.paid_days, days_in_month=total_days)
        return PayslipDraft(
            user_id=tally.user_id,
            month=month,
            year=year,
            base_salary=base_salary,
            basic_pay=salary.basic_pay,
            hra=salary.hra,
            pf_employee=salary.pf_employee,
            pf_employer=salary.pf_employer,
            esi_employee=salary.esi_employee,
            esi_employer=salary.esi_employer,
            professional_tax=salary.professional_tax,
            paid_days=tally.paid_days,
            lop_days=tally.lop_days,
            attendance_summary=tally.summary(),
            status=PayslipStatus.DRAFT,
        )

    # -------- Writes --------
    def upsert_payslip(self, draft: PayslipDraft, *, actor_id: int, allow_admin_override: bool = False) -> Payslip:
        require_month(draft.month)
        require_year(draft.year)
        PayslipStateMachine.validate_editable(draft.status)

        if draft.record_id is not None:
            existing = self._payslips.get_by_id(int(draft.record_id))
            if existing is None:
                raise NotFoundError("Payslip not found")
        else:
            existing = self._payslips.get_for_period(user_id=draft.user_id, month=draft.month, year=draft.year)

        if existing is not None and existing.is_locked:
            if not allow_admin_override:
                raise LockedPayslipError(
                    "Payslip is locked and cannot be edited. Contact admin to unlock."
                )
            logger.warning("Admin override on locked payslip id=%s by user_id=%s", existing.record_id, actor_id)

        payslip_id = draft.payslip_id or (existing.payslip_id if existing else None) or draft.default_payslip_id()
        status = draft.status
        if existing is not None and existing.status not in PayslipStateMachine.EDITABLE_STATUSES:
            status = existing.status
        saved = self._payslips.save(
            replace(
                draft,
                payslip_id=payslip_id,
                status=status,
                created_by=draft.created_by if draft.created_by is not None else actor_id,
            )
        )

        self._audit.record(
            AuditAction.PAYSLIP_CREATED if existing is None else AuditAction.PAYSLIP_UPDATED,
            entity_type=ENTITY_TYPE,
            entity_id=saved.record_id,
            performed_by=actor_id,
            user_id=saved.user_id,
            details={"month": saved.month, "year": saved.year, "payslip_id": saved.payslip_id},
        )
        return saved

    def release_payslip(self, record_id: int, released_by: int) -> Payslip:
        payslip = self.get_payslip(record_id)
        PayslipStateMachine.validate_transition(payslip.status, PayslipStatus.RELEASED)

        released = self._payslips.mark_released(record_id=payslip.record_id, released_by=int(released_by))
        if released is None:
            raise NotFoundError("Payslip not found")

        self._audit.record(
            AuditAction.PAYSLIP_RELEASED,
            entity_type=ENTITY_TYPE,
            entity_id=released.record_id,
            performed_by=int(released_by),
            user_id=released.user_id,
            details={"month": released.month, "year": released.year},
        )
        return released

    def lock_payslip(self, record_id: int, locked_by: int) -> Payslip:
        payslip = self.get_payslip(record_id)
        PayslipStateMachine.validate_transition(payslip.status, PayslipStatus.LOCKED)

        locked = self._payslips.mark_locked(record_id=payslip.record_id)
        if locked is None:
            raise NotFoundError("Payslip not found")

        self._audit.record(
            AuditAction.PAYSLIP_LOCKED,
            entity_type=ENTITY_TYPE,
            entity_id=locked.record_id,
            performed_by=int(locked_by),
            user_id=locked.user_id,
            details={"month": locked.month, "year": locked.year},
        )
        return locked

    # -------- Reads --------
    def get_payslip(self, record_id: int) -> Payslip:
        payslip = self._payslips.get_by_id(int(record_id))
        if payslip is None:
            raise NotFoundError("Payslip not found")
        return payslip

    def list_payslips(
        self,
        *,
        user_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        status: Optional[str] = None,
    ) -> Sequence[Payslip]:
        try:
            status_filter = PayslipStatus(status) if status else None
        except ValueError:
            raise ValidationError(f"Unknown payslip status: {status}")
        return self._payslips.list_all(
            user_id=user_id,
            month=require_month(month) if month is not None else None,
            year=require_year(year) if year is not None else None,
            status=status_filter,
        )
