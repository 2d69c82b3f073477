from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .model import ClockSummary
from .strategies.base import AttendanceStrategy
from .strategies.clocked_strategy import ClockedDayStrategy
from .strategies.unclocked_strategy import UnclockedDayStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the strategy for one grid cell."""

    clocked: AttendanceStrategy = field(default_factory=ClockedDayStrategy)
    unclocked: AttendanceStrategy = field(default_factory=UnclockedDayStrategy)

    def for_day(self, *, clock: Optional[ClockSummary]) -> AttendanceStrategy:
        if clock is not None and clock.clock_in is not None:
            return self.clocked
        return self.unclocked
