from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.constants import (
    ACCRUAL_MONTH_LOOP_LIMIT,
    MONTHLY_ACCRUAL_DAYS,
    PROBATION_DAYS,
    YEARLY_ACCRUAL_CAP,
)
from .financial_year import FinancialYear


@dataclass(frozen=True)
class AccrualResult:
    financial_year: FinancialYear
    months_touched: int
    accrued: float
    is_probation: bool


def months_touched(start: date, end: date, *, limit: int = ACCRUAL_MONTH_LOOP_LIMIT) -> int:
    """Calendar months intersecting [start, end], counted by stepping month by month."""
    if start > end:
        return 0
    year, month = start.year, start.month
    count = 0
    while (year, month) <= (end.year, end.month) and count < limit:
        count += 1
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return count


class LeaveAccrualCalculator:
    """Privilege-leave accrual for the financial year containing `today`.

    Accrual runs from the later of join date and FY start to the earlier of today and
    FY end, at a fixed rate per touched calendar month, capped per year.
    """

    def __init__(
        self,
        *,
        monthly_rate: float = MONTHLY_ACCRUAL_DAYS,
        yearly_cap: float = YEARLY_ACCRUAL_CAP,
        probation_days: int = PROBATION_DAYS,
    ):
        self._monthly_rate = float(monthly_rate)
        self._yearly_cap = float(yearly_cap)
        self._probation_days = int(probation_days)

    def is_probation(self, *, join_date: date, today: date) -> bool:
        return (today - join_date).days < self._probation_days

    def calculate(self, *, join_date: date, today: date) -> AccrualResult:
        fy = FinancialYear.containing(today)
        window_start = max(join_date, fy.start)
        window_end = min(today, fy.end)

        months = months_touched(window_start, window_end)
        accrued = min(months * self._monthly_rate, self._yearly_cap)
        return AccrualResult(
            financial_year=fy,
            months_touched=months,
            accrued=accrued,
            is_probation=self.is_probation(join_date=join_date, today=today),
        )
