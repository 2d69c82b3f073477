from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import ClockSummary


class AttendanceRepository(Protocol):
    def get_clock_summaries(self, *, start_date: date, end_date: date) -> Sequence[ClockSummary]:
        """One row per (employee, local day) with at least one clock-in on that day."""

        raise NotImplementedError
