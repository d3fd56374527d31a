from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.mysql_base import MySQLTableRepository
from .model import User
from .repository import UserRepository


class MySQLUserRepository(MySQLTableRepository[User], UserRepository):
    table = "users"
    model = User
    converters = {"role": Role}
    _update_skip = ("id", "created_at")

    def get_by_username(self, username: str) -> Optional[User]:
        return self._select_one("`username`=%s", (username,))
