from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    charset: str = "utf8mb4"
    pool_size: int = 0

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config.get("password") or ""),
            database=str(db_config["database"]),
            charset=str(db_config.get("charset", "utf8mb4")),
            pool_size=int(db_config.get("pool_size", 0)),
        )

    def connect_args(self, *, with_database: bool = True) -> dict:
        args = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "charset": self.charset,
        }
        if with_database:
            args["database"] = self.database
        return args


class DatabaseConnection:
    """DB connection factory shared by every repository of one app.

    With ``pool_size`` 0 each operation opens a short-lived connection;
    otherwise connections are borrowed from a ``MySQLConnectionPool`` and
    ``close()`` hands them back.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        if config.pool_size > 0:
            self._pool = pooling.MySQLConnectionPool(
                pool_name=f"staffdesk_{config.database}",
                pool_size=config.pool_size,
                **config.connect_args(),
            )

    @classmethod
    def from_dict(cls, db_config: dict) -> "DatabaseConnection":
        return cls(DBConfig.from_dict(db_config))

    def connect(self):
        if self._pool is not None:
            return self._pool.get_connection()
        return mysql.connector.connect(**self._config.connect_args())
