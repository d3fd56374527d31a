from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One employee on one working day; times are 'HH:MM'."""

    id: Optional[int]
    company_id: int
    employee_id: int
    work_date: date
    status: AttendanceStatus
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
