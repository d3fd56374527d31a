from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import clock_from_db
from ..database.mysql_base import MySQLTableRepository
from .model import Event
from .repository import EventRepository


class MySQLEventRepository(MySQLTableRepository[Event], EventRepository):
    table = "events"
    model = Event
    converters = {"start_time": clock_from_db, "end_time": clock_from_db}
    default_order = "`start_date`, `start_time`, `id`"

    def list_upcoming(self, company_id: int, from_date: date, limit: Optional[int] = None) -> Sequence[Event]:
        return self._select_where(
            "`company_id`=%s AND `start_date`>=%s",
            (int(company_id), from_date),
            limit=limit,
        )
