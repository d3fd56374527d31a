from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..common.repository import TenantRepository
from .model import AttendanceRecord


class AttendanceRepository(TenantRepository[AttendanceRecord], Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_filtered(
        self,
        company_id: int,
        *,
        work_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_by_employee(self, employee_id: int) -> int:
        raise NotImplementedError

    def count_on_date(self, company_id: int, work_date: date) -> int:
        raise NotImplementedError
