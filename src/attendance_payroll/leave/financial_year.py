from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.constants import FINANCIAL_YEAR_START_MONTH


@dataclass(frozen=True)
class FinancialYear:
    """April 1 through March 31, named by the starting calendar year ("2024-2025")."""

    start: date
    end: date

    @property
    def label(self) -> str:
        return f"{self.start.year}-{self.end.year}"

    @classmethod
    def containing(cls, d: date) -> "FinancialYear":
        first_year = d.year if d.month >= FINANCIAL_YEAR_START_MONTH else d.year - 1
        return cls(start=date(first_year, FINANCIAL_YEAR_START_MONTH, 1), end=date(first_year + 1, 3, 31))
