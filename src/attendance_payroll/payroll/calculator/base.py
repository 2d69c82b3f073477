from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SalaryBreakdown:
    basic_pay: Decimal
    hra: Decimal
    pf_employee: Decimal
    pf_employer: Decimal
    esi_employee: Decimal
    esi_employer: Decimal
    professional_tax: Decimal

    @property
    def gross(self) -> Decimal:
        return self.basic_pay + self.hra


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, *, base_salary: Decimal, paid_days: Decimal, days_in_month: int) -> SalaryBreakdown:
        raise NotImplementedError
