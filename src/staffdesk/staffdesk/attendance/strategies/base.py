from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...catalog.model import Shift
from ...core.enums import AttendanceStatus


class AttendanceStrategy(ABC):
    """Strategy Pattern: decide the status of a check-in when none was given."""

    @abstractmethod
    def decide_checkin(self, *, check_in: str, shift: Optional[Shift]) -> AttendanceStatus:
        raise NotImplementedError
