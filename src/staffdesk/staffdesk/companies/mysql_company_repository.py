from __future__ import annotations

from typing import Optional

from ..database.mysql_base import MySQLTableRepository
from .model import Company
from .repository import CompanyRepository


class MySQLCompanyRepository(MySQLTableRepository[Company], CompanyRepository):
    table = "companies"
    model = Company
    _update_skip = ("id", "created_at")

    def get_by_name(self, name: str) -> Optional[Company]:
        return self._select_one("`name`=%s", (name,))
