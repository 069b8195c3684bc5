from __future__ import annotations

from datetime import date

import mysql.connector
import pytest

from employee_tracker.core.enums import Role
from employee_tracker.core.exceptions import StorageError
from employee_tracker.database.base import db_cursor, fetchone
from employee_tracker.database.bootstrap import (
    _iter_sql_statements,
    apply_schema,
    ensure_database_exists,
    ensure_default_admin,
    list_tables,
)
from employee_tracker.database.connection import DatabaseConnection, DBConfig
from employee_tracker.main import create_app


@pytest.fixture
def conn(sqlite_config) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_dict(sqlite_config))


def test_schema_creates_five_tables(conn):
    apply_schema(conn)
    apply_schema(conn)

    assert list_tables(conn) == ["attendance", "messages", "reviews", "tasks", "users"]


def test_seed_inserts_exactly_one_admin(container):
    users = container.users_repo.list_all()

    assert len(users) == 1
    admin = users[0]
    assert admin.role == Role.ADMIN
    assert admin.name == "Admin User"
    assert admin.designation == "System Administrator"
    assert admin.department == "Management"
    assert admin.joining_date == date(2024, 1, 1)
    assert container.user_service.list_employees() == []


def test_seed_is_idempotent(container):
    assert ensure_default_admin(container.conn) is False
    assert len(container.users_repo.list_all()) == 1


def test_seed_failure_is_swallowed(conn):
    # no schema applied yet
    assert ensure_default_admin(conn) is False


def test_driver_errors_become_storage_errors(conn):
    with pytest.raises(StorageError):
        with db_cursor(conn) as (_, cur):
            cur.execute("SELECT * FROM missing_table")


def test_failed_write_is_rolled_back(conn):
    apply_schema(conn)

    with pytest.raises(StorageError):
        with db_cursor(conn) as (_, cur):
            cur.execute(
                "INSERT INTO tasks(employee_id, title, priority, status) VALUES(%s,%s,%s,%s)",
                (1, "Kept?", "Low", "Pending"),
            )
            cur.execute("INSERT INTO nowhere VALUES(1)")

    with db_cursor(conn) as (_, cur):
        cur.execute("SELECT COUNT(*) AS total FROM tasks")
        assert fetchone(cur)["total"] == 0


def test_sql_splitter_ignores_quoted_semicolons():
    sql = "CREATE TABLE a(x TEXT DEFAULT ';');\nINSERT INTO a VALUES('b;c');\n"

    assert list(_iter_sql_statements(sql)) == ["CREATE TABLE a(x TEXT DEFAULT ';')", "INSERT INTO a VALUES('b;c')"]


def test_unknown_driver_rejected():
    with pytest.raises(ValueError):
        DatabaseConnection(DBConfig(driver="postgres"))


def refuse_connection(**kwargs):
    raise mysql.connector.errors.InterfaceError("Can't connect to MySQL server")


def test_unreachable_mysql_raises_storage_error(monkeypatch):
    monkeypatch.setattr(mysql.connector, "connect", refuse_connection)
    conn = DatabaseConnection(DBConfig(driver="mysql", host="db.invalid"))

    with pytest.raises(StorageError):
        ensure_database_exists(conn)
    with pytest.raises(StorageError):
        apply_schema(conn)


def test_app_starts_when_mysql_is_down(monkeypatch):
    monkeypatch.setattr(mysql.connector, "connect", refuse_connection)
    monkeypatch.setenv("APP_ENV", "testing")

    app = create_app({"DB_CONFIG": {"driver": "mysql", "host": "db.invalid"}})

    assert "employee_tracker" in app.extensions
