from __future__ import annotations

from typing import Optional

from ...catalog.model import Shift
from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy


class NormalStrategy(AttendanceStrategy):
    """On-time check-in."""

    def decide_checkin(self, *, check_in: str, shift: Optional[Shift]) -> AttendanceStatus:
        return AttendanceStatus.PRESENT
