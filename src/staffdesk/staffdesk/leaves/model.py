from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import inclusive_days
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    id: Optional[int]
    company_id: int
    employee_id: int
    leave_type_id: int
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus = LeaveStatus.PENDING
    approved_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def days(self) -> int:
        return inclusive_days(self.start_date, self.end_date)
