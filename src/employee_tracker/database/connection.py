from __future__ import annotations

import sqlite3
from dataclasses import dataclass

import mysql.connector

SQLITE = "sqlite"
MYSQL = "mysql"


@dataclass
class DBConfig:
    driver: str = SQLITE
    path: str = "employee_tracker.db"
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "employee_tracker"

    @classmethod
    def from_dict(cls, data: dict) -> "DBConfig":
        return cls(
            driver=str(data.get("driver", SQLITE)).lower(),
            path=str(data.get("path", "employee_tracker.db")),
            host=str(data.get("host", "localhost")),
            port=int(data.get("port", 3306)),
            user=str(data.get("user", "root")),
            password=str(data.get("password", "")),
            database=str(data.get("database", "employee_tracker")),
        )


class DatabaseConnection:
    """DB connection factory.

    Built once at startup and injected into repositories. Each operation opens
    a short-lived connection.
    """

    def __init__(self, config: DBConfig):
        if config.driver not in (SQLITE, MYSQL):
            raise ValueError(f"Unsupported database driver: {config.driver!r}")
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def driver(self) -> str:
        return self._config.driver

    def connect(self):
        if self._config.driver == SQLITE:
            conn = sqlite3.connect(self._config.path)
            conn.row_factory = sqlite3.Row
            return conn

        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
