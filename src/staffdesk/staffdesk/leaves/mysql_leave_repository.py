from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.mysql_base import MySQLTableRepository, db_cursor, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository


class MySQLLeaveRepository(MySQLTableRepository[LeaveRequest], LeaveRepository):
    table = "leaves"
    model = LeaveRequest
    converters = {"status": LeaveStatus}
    default_order = "`created_at` DESC, `id` DESC"
    # status only moves through decide()
    _update_skip = ("id", "company_id", "created_at", "status", "approved_by")

    def list_filtered(
        self,
        company_id: int,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        where = ["`company_id`=%s"]
        params: list = [int(company_id)]
        if status is not None:
            where.append("`status`=%s")
            params.append(status.value)
        if employee_id is not None:
            where.append("`employee_id`=%s")
            params.append(int(employee_id))
        return self._select_where(" AND ".join(where), params)

    def update_pending(self, leave: LeaveRequest) -> Optional[LeaveRequest]:
        sql, params = self._update_statement(leave)
        with db_cursor(self._conn_factory) as (_, cur):
            # the row lock orders this edit against decide()
            cur.execute("SELECT `status` FROM leaves WHERE id=%s FOR UPDATE", (int(leave.id),))
            row = fetchone(cur)
            if row is None or row["status"] != LeaveStatus.PENDING.value:
                return None
            cur.execute(sql, params)
        return self.get_by_id(int(leave.id))

    def decide(self, leave_id: int, *, status: LeaveStatus, decided_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s, approved_by=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, int(decided_by), int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def count_by_employee(self, employee_id: int) -> int:
        return self._count_where("`employee_id`=%s", (int(employee_id),))

    def count_by_leave_type(self, leave_type_id: int) -> int:
        return self._count_where("`leave_type_id`=%s", (int(leave_type_id),))

    def count_by_status(self, company_id: int, status: LeaveStatus) -> int:
        return self._count_where("`company_id`=%s AND `status`=%s", (int(company_id), status.value))

    def count_on_leave(self, company_id: int, day: date) -> int:
        return self._count_where(
            "`company_id`=%s AND `status`=%s AND `start_date`<=%s AND `end_date`>=%s",
            (int(company_id), LeaveStatus.APPROVED.value, day, day),
        )
