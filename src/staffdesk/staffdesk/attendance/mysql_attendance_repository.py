from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import clock_from_db
from ..core.enums import AttendanceStatus
from ..database.mysql_base import MySQLTableRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(MySQLTableRepository[AttendanceRecord], AttendanceRepository):
    table = "attendance"
    model = AttendanceRecord
    column_names = {"work_date": "date"}
    converters = {"status": AttendanceStatus, "check_in": clock_from_db, "check_out": clock_from_db}
    default_order = "`date` DESC, `id` DESC"

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._select_one("`employee_id`=%s AND `date`=%s", (int(employee_id), work_date))

    def list_filtered(
        self,
        company_id: int,
        *,
        work_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        where = ["`company_id`=%s"]
        params: list = [int(company_id)]
        if work_date is not None:
            where.append("`date`=%s")
            params.append(work_date)
        if employee_id is not None:
            where.append("`employee_id`=%s")
            params.append(int(employee_id))
        return self._select_where(" AND ".join(where), params)

    def count_by_employee(self, employee_id: int) -> int:
        return self._count_where("`employee_id`=%s", (int(employee_id),))

    def count_on_date(self, company_id: int, work_date: date) -> int:
        return self._count_where("`company_id`=%s AND `date`=%s", (int(company_id), work_date))
