from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from ..core.enums import PayslipStatus

ZERO = Decimal("0")


def _money(value: Decimal) -> float:
    return float(value)


@dataclass
class AttendanceTally:
    """Per-employee day counts for one payroll month."""

    user_id: int
    full_name: Optional[str]
    email: str
    paid_days: Decimal = ZERO
    lop_days: Decimal = ZERO
    present_days: int = 0
    half_days: int = 0
    absent_days: int = 0
    leave_days: int = 0
    unpaid_leave_days: int = 0
    week_off_days: int = 0

    def summary(self) -> dict:
        return {
            "present": self.present_days,
            "half_day": self.half_days,
            "absent": self.absent_days,
            "leave": self.leave_days,
            "unpaid_leave": self.unpaid_leave_days,
            "week_off": self.week_off_days,
            "paid_days": float(self.paid_days),
            "total_lop": float(self.lop_days),
        }


@dataclass(frozen=True)
class PayslipDraft:
    """Payslip payload before it is written. Totals are always derived, never supplied."""

    user_id: int
    month: int
    year: int
    basic_pay: Decimal = ZERO
    hra: Decimal = ZERO
    special_allowance: Decimal = ZERO
    bonus: Decimal = ZERO
    incentives: Decimal = ZERO
    other_earnings: Decimal = ZERO
    pf_employee: Decimal = ZERO
    pf_employer: Decimal = ZERO
    esi_employee: Decimal = ZERO
    esi_employer: Decimal = ZERO
    professional_tax: Decimal = ZERO
    tds: Decimal = ZERO
    other_deductions: Decimal = ZERO
    base_salary: Optional[Decimal] = None
    paid_days: Decimal = ZERO
    lop_days: Decimal = ZERO
    attendance_summary: dict = field(default_factory=dict)
    status: PayslipStatus = PayslipStatus.DRAFT
    payslip_id: Optional[str] = None
    employee_id: Optional[str] = None
    document_url: Optional[str] = None
    company_name: Optional[str] = None
    company_address: Optional[str] = None
    issue_date: Optional[date] = None
    created_by: Optional[int] = None
    record_id: Optional[int] = None

    @property
    def total_earnings(self) -> Decimal:
        return (
            self.basic_pay
            + self.hra
            + self.special_allowance
            + self.bonus
            + self.incentives
            + self.other_earnings
        )

    @property
    def total_deductions(self) -> Decimal:
        # Employer PF/ESI legs are reported on the slip but not deducted.
        return self.pf_employee + self.esi_employee + self.professional_tax + self.tds + self.other_deductions

    @property
    def net_pay(self) -> Decimal:
        return self.total_earnings - self.total_deductions

    def default_payslip_id(self) -> str:
        return f"PS-{self.employee_id or self.user_id}-{self.year:04d}{self.month:02d}"


@dataclass(frozen=True)
class Payslip:
    """Stored payslip row."""

    record_id: int
    user_id: int
    month: int
    year: int
    payslip_id: str
    basic_pay: Decimal
    hra: Decimal
    special_allowance: Decimal
    bonus: Decimal
    incentives: Decimal
    other_earnings: Decimal
    total_earnings: Decimal
    pf_employee: Decimal
    pf_employer: Decimal
    esi_employee: Decimal
    esi_employer: Decimal
    professional_tax: Decimal
    tds: Decimal
    other_deductions: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    status: PayslipStatus
    is_locked: bool = False
    base_salary: Optional[Decimal] = None
    paid_days: Decimal = ZERO
    lop_days: Decimal = ZERO
    attendance_summary: dict = field(default_factory=dict)
    employee_id: Optional[str] = None
    document_url: Optional[str] = None
    company_name: Optional[str] = None
    company_address: Optional[str] = None
    issue_date: Optional[date] = None
    created_by: Optional[int] = None
    released_at: Optional[datetime] = None
    released_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "payslip_id": self.payslip_id,
            "user_id": self.user_id,
            "employee_id": self.employee_id,
            "month": self.month,
            "year": self.year,
            "base_salary": _money(self.base_salary) if self.base_salary is not None else None,
            "basic_pay": _money(self.basic_pay),
            "hra": _money(self.hra),
            "special_allowance": _money(self.special_allowance),
            "bonus": _money(self.bonus),
            "incentives": _money(self.incentives),
            "other_earnings": _money(self.other_earnings),
            "total_earnings": _money(self.total_earnings),
            "pf_employee": _money(self.pf_employee),
            "pf_employer": _money(self.pf_employer),
            "esi_employee": _money(self.esi_employee),
            "esi_employer": _money(self.esi_employer),
            "professional_tax": _money(self.professional_tax),
            "tds": _money(self.tds),
            "other_deductions": _money(self.other_deductions),
            "total_deductions": _money(self.total_deductions),
            "net_pay": _money(self.net_pay),
            "paid_days": float(self.paid_days),
            "lop_days": float(self.lop_days),
            "attendance_summary": self.attendance_summary,
            "status": self.status.value,
            "is_locked": self.is_locked,
            "document_url": self.document_url,
            "company_name": self.company_name,
            "company_address": self.company_address,
            "issue_date": self.issue_date.isoformat() if self.issue_date else None,
            "created_by": self.created_by,
            "released_at": self.released_at.isoformat() if self.released_at else None,
            "released_by": self.released_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class BatchFailure:
    user_id: int
    reason: str


@dataclass(frozen=True)
class GenerationReport:
    month: int
    year: int
    payslips: List[Payslip] = field(default_factory=list)
    failures: List[BatchFailure] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "year": self.year,
            "generated": len(self.payslips),
            "payslips": [p.to_dict() for p in self.payslips],
            "failures": [{"user_id": f.user_id, "reason": f.reason} for f in self.failures],
        }
