from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import (
    ESI_EMPLOYEE_RATE,
    ESI_EMPLOYER_RATE,
    HRA_RATE,
    PF_RATE,
    PROFESSIONAL_TAX_AMOUNT,
    PROFESSIONAL_TAX_THRESHOLD,
)
from .base import PayrollCalculator, SalaryBreakdown

WHOLE = Decimal("1")


def round_whole(amount: Decimal) -> Decimal:
    """Round to whole currency units, halves away from zero."""
    return amount.quantize(WHOLE, rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard structure: basic = base, HRA = 40% of base, both prorated by paid days.

    PF is 12% of actual basic on both legs, ESI is 0.75% / 3.25% of gross, and a flat
    professional tax applies above the gross threshold.
    """

    def compute(self, *, base_salary: Decimal, paid_days: Decimal, days_in_month: int) -> SalaryBreakdown:
        if days_in_month <= 0:
            raise ValueError("days_in_month must be positive")

        base = Decimal(base_salary)
        std_basic = base
        std_hra = base * HRA_RATE

        # amount * paid_days / days_in_month, multiplied first.
        basic = round_whole(std_basic * paid_days / days_in_month)
        hra = round_whole(std_hra * paid_days / days_in_month)
        gross = basic + hra

        pf = round_whole(basic * PF_RATE)
        return SalaryBreakdown(
            basic_pay=basic,
            hra=hra,
            pf_employee=pf,
            pf_employer=pf,
            esi_employee=round_whole(gross * ESI_EMPLOYEE_RATE),
            esi_employer=round_whole(gross * ESI_EMPLOYER_RATE),
            professional_tax=PROFESSIONAL_TAX_AMOUNT if gross > PROFESSIONAL_TAX_THRESHOLD else Decimal("0"),
        )
