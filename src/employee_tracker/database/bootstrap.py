from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.constants import (
    DEFAULT_ADMIN_DEPARTMENT,
    DEFAULT_ADMIN_DESIGNATION,
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_JOINING_DATE,
    DEFAULT_ADMIN_NAME,
    DEFAULT_ADMIN_PASSWORD,
)
from ..core.enums import Role
from ..core.exceptions import StorageError
from .base import DRIVER_ERRORS, db_cursor, fetchall, fetchone
from .connection import MYSQL, SQLITE, DatabaseConnection

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parent / "sql"


def schema_path_for(driver: str) -> Path:
    return SQL_DIR / f"schema_{driver}.sql"


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False

    for ch in sql:
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    if conn_factory.driver != MYSQL:
        return
    config = conn_factory.config
    try:
        conn = mysql.connector.connect(
            host=config.host,
            port=int(config.port),
            user=config.user,
            password=config.password,
        )
        try:
            cur = conn.cursor()
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
            )
            conn.commit()
        finally:
            conn.close()
    except DRIVER_ERRORS as e:
        raise StorageError(f"Could not create database {config.database}: {e}") from e


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Optional[str | Path] = None) -> None:
    """Create all tables if missing. Safe to call on every start."""

    ensure_database_exists(conn_factory)
    path = Path(schema_path) if schema_path else schema_path_for(conn_factory.driver)
    sql = path.read_text(encoding="utf-8")

    with db_cursor(conn_factory) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)


def ensure_default_admin(conn_factory: DatabaseConnection) -> bool:
    """Seed the single administrator account on first run.

    Returns True when the admin row was inserted. Failures are logged and
    swallowed so a broken seed never blocks startup.
    """

    try:
        with db_cursor(conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users WHERE email=%s", (DEFAULT_ADMIN_EMAIL,))
            if fetchone(cur):
                return False
            cur.execute(
                """
                INSERT INTO users(email, password_hash, name, role, designation, department, joining_date, contact)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    DEFAULT_ADMIN_EMAIL,
                    generate_password_hash(DEFAULT_ADMIN_PASSWORD),
                    DEFAULT_ADMIN_NAME,
                    Role.ADMIN.value,
                    DEFAULT_ADMIN_DESIGNATION,
                    DEFAULT_ADMIN_DEPARTMENT,
                    DEFAULT_ADMIN_JOINING_DATE,
                    None,
                ),
            )
        logger.info("Seeded default admin account %s", DEFAULT_ADMIN_EMAIL)
        return True
    except StorageError:
        logger.exception("Seeding the default admin failed")
        return False


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory) as (_, cur):
        if conn_factory.driver == SQLITE:
            cur.execute("SELECT name AS table_name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'")
        else:
            cur.execute(
                "SELECT table_name AS table_name FROM information_schema.tables WHERE table_schema=%s",
                (conn_factory.config.database,),
            )
        return sorted(str(r["table_name"]) for r in fetchall(cur))
