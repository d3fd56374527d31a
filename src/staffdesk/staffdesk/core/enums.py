from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles, ordered from least to most privileged."""

    USER = "user"
    MANAGER = "manager"
    HR = "hr"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return _ROLE_ORDER.index(self)

    def has_at_least(self, required: "Role") -> bool:
        return self.rank >= Role(required).rank


_ROLE_ORDER = [Role.USER, Role.MANAGER, Role.HR, Role.ADMIN]


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half_day"


class LeaveStatus(str, Enum):
    """Leave approval workflow. APPROVED and REJECTED are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
