from __future__ import annotations

from datetime import date

import pytest

from employee_tracker.container import build_container
from employee_tracker.database.bootstrap import apply_schema, ensure_default_admin
from employee_tracker.main import create_app


@pytest.fixture
def fixed_today() -> date:
    return date(2026, 2, 1)


@pytest.fixture
def sqlite_config(tmp_path) -> dict:
    return {"driver": "sqlite", "path": str(tmp_path / "tracker.db")}


@pytest.fixture
def container(sqlite_config):
    c = build_container(db_config=sqlite_config)
    apply_schema(c.conn)
    ensure_default_admin(c.conn)
    return c


@pytest.fixture
def app(sqlite_config, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app({"DB_CONFIG": sqlite_config})
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_container(app):
    return app.extensions["employee_tracker"]
