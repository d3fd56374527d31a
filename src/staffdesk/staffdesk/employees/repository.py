from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.repository import TenantRepository
from .model import Employee


class EmployeeRepository(TenantRepository[Employee], Protocol):
    def get_by_email(self, company_id: int, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, company_id: int, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def count_referencing(self, field: str, value: int) -> int:
        """Number of employees whose ``field`` (a lookup foreign key) equals ``value``."""
        raise NotImplementedError

    def count_for_company(self, company_id: int) -> int:
        raise NotImplementedError

    def list_recent(self, company_id: int, limit: int) -> Sequence[Employee]:
        """Newest joiners first."""
        raise NotImplementedError
