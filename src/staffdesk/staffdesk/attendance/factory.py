from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..catalog.model import Shift
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


def _minutes(clock: str) -> int:
    hours, minutes = clock.split(":")[:2]
    return int(hours) * 60 + int(minutes)


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on the employee's shift."""

    grace_minutes: int = 5

    def for_checkin(self, *, check_in: str, shift: Optional[Shift]) -> AttendanceStrategy:
        if not shift:
            return NormalStrategy()
        if _minutes(check_in) <= _minutes(shift.start_time) + self.grace_minutes:
            return NormalStrategy()
        return LateStrategy()
