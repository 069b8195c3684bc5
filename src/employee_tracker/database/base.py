from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector

from ..core.exceptions import StorageError
from .connection import SQLITE, DatabaseConnection

DRIVER_ERRORS = (sqlite3.Error, mysql.connector.Error)


class SQLiteCursor:
    """Adapts a sqlite3 cursor to the mysql-connector calling convention.

    Queries are written once with %s placeholders and rows come back as dicts.
    """

    def __init__(self, cursor: sqlite3.Cursor):
        self._cursor = cursor

    def execute(self, sql: str, params: Sequence[Any] = ()) -> None:
        self._cursor.execute(sql.replace("%s", "?"), tuple(_sqlite_param(p) for p in params))

    def fetchone(self) -> Optional[Dict[str, Any]]:
        row = self._cursor.fetchone()
        return dict(row) if row is not None else None

    def fetchall(self) -> List[Dict[str, Any]]:
        return [dict(r) for r in self._cursor.fetchall()]

    @property
    def lastrowid(self) -> int:
        return self._cursor.lastrowid

    @property
    def rowcount(self) -> int:
        return self._cursor.rowcount

    def close(self) -> None:
        self._cursor.close()


def _sqlite_param(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat(sep=" ", timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    return value


@contextmanager
def db_cursor(conn_factory: DatabaseConnection):
    try:
        conn = conn_factory.connect()
    except DRIVER_ERRORS as e:
        raise StorageError(f"Could not open database: {e}") from e

    try:
        if conn_factory.driver == SQLITE:
            cur = SQLiteCursor(conn.cursor())
        else:
            cur = conn.cursor(dictionary=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except DRIVER_ERRORS as e:
        conn.rollback()
        raise StorageError(str(e)) from e
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
