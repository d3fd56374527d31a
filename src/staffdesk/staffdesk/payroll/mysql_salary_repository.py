from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PaymentStatus
from ..database.mysql_base import MySQLTableRepository
from .model import SalaryRecord
from .repository import SalaryRepository


class MySQLSalaryRepository(MySQLTableRepository[SalaryRecord], SalaryRepository):
    table = "salaries"
    model = SalaryRecord
    converters = {"payment_status": PaymentStatus}
    default_order = "`year` DESC, `month` DESC, `id` DESC"

    def get_for_period(self, employee_id: int, month: int, year: int) -> Optional[SalaryRecord]:
        return self._select_one(
            "`employee_id`=%s AND `month`=%s AND `year`=%s",
            (int(employee_id), int(month), int(year)),
        )

    def list_filtered(
        self,
        company_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[SalaryRecord]:
        where = ["`company_id`=%s"]
        params: list = [int(company_id)]
        for column, value in (("month", month), ("year", year), ("employee_id", employee_id)):
            if value is not None:
                where.append(f"`{column}`=%s")
                params.append(int(value))
        return self._select_where(" AND ".join(where), params)

    def count_by_employee(self, employee_id: int) -> int:
        return self._count_where("`employee_id`=%s", (int(employee_id),))
