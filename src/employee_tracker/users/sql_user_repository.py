from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Sequence, Tuple

from ..common.datetime_utils import to_date
from ..common.events import ChangeNotifier, Subscription
from ..core.enums import Role
from ..database.base import db_cursor, fetchall, fetchone
from ..database.connection import DatabaseConnection
from .model import User
from .repository import UserRepository

TABLE = "users"
_COLUMNS = "user_id, email, password_hash, name, role, designation, department, joining_date, contact"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        name=row["name"],
        role=Role(row["role"]),
        designation=row.get("designation") or "",
        department=row.get("department") or "",
        joining_date=to_date(row.get("joining_date")),
        contact=row.get("contact"),
    )


class SQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection, notifier: ChangeNotifier):
        self._conn_factory = conn_factory
        self._notifier = notifier

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        role: Role,
        designation: str,
        department: str,
        joining_date: Optional[date],
        contact: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(email, password_hash, name, role, designation, department, joining_date, contact)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (email, password_hash, name, role.value, designation, department, joining_date, contact),
            )
            new_id = int(cur.lastrowid)
        self._notifier.notify(TABLE)
        return new_id

    def update_user(self, user: User) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET email=%s, password_hash=%s, name=%s, role=%s, designation=%s,
                    department=%s, joining_date=%s, contact=%s
                WHERE user_id=%s
                """,
                (
                    user.email,
                    user.password_hash,
                    user.name,
                    user.role.value,
                    user.designation,
                    user.department,
                    user.joining_date,
                    user.contact,
                    user.user_id,
                ),
            )
            changed = cur.rowcount > 0
        if changed:
            self._notifier.notify(TABLE)
        return changed

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            changed = cur.rowcount > 0
        if changed:
            self._notifier.notify(TABLE)
        return changed

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY name")
            return [_to_user(r) for r in fetchall(cur)]

    def list_employees(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY name", (Role.EMPLOYEE.value,))
            return [_to_user(r) for r in fetchall(cur)]

    def observe_employees(self, callback: Callable[[Sequence[User]], None]) -> Tuple[Sequence[User], Subscription]:
        return self._notifier.subscribe(TABLE, self.list_employees, callback)

    def observe_all(self, callback: Callable[[Sequence[User]], None]) -> Tuple[Sequence[User], Subscription]:
        return self._notifier.subscribe(TABLE, self.list_all, callback)
