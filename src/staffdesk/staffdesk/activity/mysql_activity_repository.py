from __future__ import annotations

from typing import Sequence

from ..database.mysql_base import MySQLTableRepository
from .model import ActivityLog
from .repository import ActivityRepository


class MySQLActivityRepository(MySQLTableRepository[ActivityLog], ActivityRepository):
    table = "activity_logs"
    model = ActivityLog

    def list_recent(self, company_id: int, limit: int) -> Sequence[ActivityLog]:
        return self._select_where(
            "`company_id`=%s",
            (int(company_id),),
            order_by="`created_at` DESC, `id` DESC",
            limit=limit,
        )
