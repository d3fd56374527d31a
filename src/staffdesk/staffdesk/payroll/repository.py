from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.repository import TenantRepository
from .model import SalaryRecord


class SalaryRepository(TenantRepository[SalaryRecord], Protocol):
    def get_for_period(self, employee_id: int, month: int, year: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list_filtered(
        self,
        company_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[SalaryRecord]:
        raise NotImplementedError

    def count_by_employee(self, employee_id: int) -> int:
        raise NotImplementedError
