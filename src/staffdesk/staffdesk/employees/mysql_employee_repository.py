from __future__ import annotations

from typing import Optional, Sequence

from ..database.mysql_base import MySQLTableRepository
from .model import Employee
from .repository import EmployeeRepository

_FOREIGN_KEYS = ("department_id", "designation_id", "employee_type_id", "shift_id", "location_id")


class MySQLEmployeeRepository(MySQLTableRepository[Employee], EmployeeRepository):
    table = "employees"
    model = Employee
    converters = {"is_active": bool}
    default_order = "`first_name`, `last_name`, `id`"

    def get_by_email(self, company_id: int, email: str) -> Optional[Employee]:
        return self._select_one("`company_id`=%s AND `email`=%s", (int(company_id), email))

    def get_by_code(self, company_id: int, employee_code: str) -> Optional[Employee]:
        return self._select_one("`company_id`=%s AND `employee_code`=%s", (int(company_id), employee_code))

    def count_referencing(self, field: str, value: int) -> int:
        if field not in _FOREIGN_KEYS:
            raise ValueError(f"Not an employee foreign key: {field}")
        return self._count_where(f"`{field}`=%s", (int(value),))

    def count_for_company(self, company_id: int) -> int:
        return self._count_where("`company_id`=%s", (int(company_id),))

    def list_recent(self, company_id: int, limit: int) -> Sequence[Employee]:
        return self._select_where(
            "`company_id`=%s",
            (int(company_id),),
            order_by="`date_of_joining` DESC, `id` DESC",
            limit=limit,
        )
