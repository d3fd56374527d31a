from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import fields, replace
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

import mysql.connector

from ..core.exceptions import ConflictError, InvalidReferenceError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

T = TypeVar("T")

ER_DUP_ENTRY = 1062
ER_ROW_IS_REFERENCED = 1451
ER_NO_REFERENCED_ROW = 1452


def _translate_integrity_error(exc: mysql.connector.errors.IntegrityError) -> Exception:
    if exc.errno == ER_DUP_ENTRY:
        return ConflictError("A record with the same unique values already exists")
    if exc.errno == ER_ROW_IS_REFERENCED:
        return ConflictError("Record is still referenced by other records")
    if exc.errno == ER_NO_REFERENCED_ROW:
        return InvalidReferenceError("reference", "Referenced record does not exist")
    return ConflictError("Integrity constraint violated")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on error.

    Driver integrity errors come out as domain errors so unique keys and
    foreign keys back up the service-level checks.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.errors.IntegrityError as exc:
        conn.rollback()
        logger.info("Integrity error %s: %s", exc.errno, exc.msg)
        raise _translate_integrity_error(exc) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def _to_db(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


class MySQLTableRepository(Generic[T]):
    """Maps one frozen dataclass onto one table.

    Subclasses set ``table``, ``model`` and optionally ``column_names`` (for
    fields whose column name differs) and ``converters`` (applied on read).
    """

    table: str = ""
    model: Type[T]
    column_names: Mapping[str, str] = {}
    converters: Mapping[str, Callable[[Any], Any]] = {}
    default_order: str = "id"

    _insert_skip = ("id", "created_at")
    _update_skip = ("id", "company_id", "created_at")

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _column(self, field_name: str) -> str:
        return f"`{self.column_names.get(field_name, field_name)}`"

    def _field_names(self) -> list[str]:
        return [f.name for f in fields(self.model)]

    def _select_sql(self) -> str:
        cols = ", ".join(f"{self._column(name)} AS `{name}`" for name in self._field_names())
        return f"SELECT {cols} FROM `{self.table}`"

    def _from_row(self, row: Mapping[str, Any]) -> T:
        values = {}
        for name in self._field_names():
            value = row.get(name)
            convert = self.converters.get(name)
            if convert is not None and value is not None:
                value = convert(value)
            values[name] = value
        return self.model(**values)

    def _select_where(
        self,
        where: str = "",
        params: Sequence[Any] = (),
        *,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[T]:
        sql = self._select_sql()
        if where:
            sql += f" WHERE {where}"
        sql += f" ORDER BY {order_by or self.default_order}"
        args = list(params)
        if limit is not None:
            sql += " LIMIT %s"
            args.append(int(limit))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(args))
            return [self._from_row(r) for r in fetchall(cur)]

    def _select_one(self, where: str, params: Sequence[Any]) -> Optional[T]:
        rows = self._select_where(where, params, limit=1)
        return rows[0] if rows else None

    def _count_where(self, where: str, params: Sequence[Any]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM `{self.table}` WHERE {where}", tuple(params))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def get_by_id(self, entity_id: int) -> Optional[T]:
        return self._select_one("`id`=%s", (int(entity_id),))

    def list_for_company(self, company_id: int) -> Sequence[T]:
        return self._select_where("`company_id`=%s", (int(company_id),))

    def create(self, entity: T) -> T:
        names = [n for n in self._field_names() if n not in self._insert_skip]
        cols = ", ".join(self._column(n) for n in names)
        marks = ", ".join(["%s"] * len(names))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO `{self.table}` ({cols}) VALUES ({marks})",
                tuple(_to_db(getattr(entity, n)) for n in names),
            )
            new_id = int(cur.lastrowid)
        return self.get_by_id(new_id) or replace(entity, id=new_id)

    def _update_statement(self, entity: T) -> tuple:
        names = [n for n in self._field_names() if n not in self._update_skip]
        assignments = ", ".join(f"{self._column(n)}=%s" for n in names)
        params = tuple(_to_db(getattr(entity, n)) for n in names) + (int(getattr(entity, "id")),)
        return f"UPDATE `{self.table}` SET {assignments} WHERE `id`=%s", params

    def update(self, entity: T) -> Optional[T]:
        sql, params = self._update_statement(entity)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
        return self.get_by_id(int(getattr(entity, "id")))

    def delete_by_id(self, entity_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM `{self.table}` WHERE `id`=%s", (int(entity_id),))
            return cur.rowcount > 0
