from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Sequence, Tuple

from ..common.datetime_utils import to_date
from ..common.events import ChangeNotifier, Subscription
from ..core.enums import TaskPriority, TaskStatus
from ..database.base import db_cursor, fetchall, fetchone
from ..database.connection import DatabaseConnection
from .model import Task
from .repository import TaskRepository

TABLE = "tasks"
_COLUMNS = "task_id, employee_id, title, description, priority, status, deadline, assigned_date"


def _to_task(row: dict) -> Task:
    return Task(
        task_id=int(row["task_id"]),
        employee_id=int(row["employee_id"]),
        title=row["title"],
        description=row.get("description") or "",
        priority=TaskPriority(row["priority"]),
        status=TaskStatus(row["status"]),
        deadline=to_date(row.get("deadline")),
        assigned_date=to_date(row.get("assigned_date")),
    )


class SQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection, notifier: ChangeNotifier):
        self._conn_factory = conn_factory
        self._notifier = notifier

    def _select(self, where: str = "", params: tuple = ()) -> list[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks {where} ORDER BY task_id DESC", params)
            return [_to_task(r) for r in fetchall(cur)]

    def _count(self, where: str, params: tuple) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM tasks {where}", params)
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE task_id=%s", (int(task_id),))
            row = fetchone(cur)
            return _to_task(row) if row else None

    def create_task(
        self,
        *,
        employee_id: int,
        title: str,
        description: str,
        priority: TaskPriority,
        status: TaskStatus,
        deadline: Optional[date],
        assigned_date: Optional[date],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(employee_id, title, description, priority, status, deadline, assigned_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), title, description, priority.value, status.value, deadline, assigned_date),
            )
            new_id = int(cur.lastrowid)
        self._notifier.notify(TABLE)
        return new_id

    def update_task(self, task: Task) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tasks
                SET employee_id=%s, title=%s, description=%s, priority=%s, status=%s, deadline=%s, assigned_date=%s
                WHERE task_id=%s
                """,
                (
                    task.employee_id,
                    task.title,
                    task.description,
                    task.priority.value,
                    task.status.value,
                    task.deadline,
                    task.assigned_date,
                    task.task_id,
                ),
            )
            changed = cur.rowcount > 0
        if changed:
            self._notifier.notify(TABLE)
        return changed

    def update_status(self, task_id: int, status: TaskStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tasks SET status=%s WHERE task_id=%s", (status.value, int(task_id)))
            changed = cur.rowcount > 0
        if changed:
            self._notifier.notify(TABLE)
        return changed

    def delete_by_id(self, task_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE task_id=%s", (int(task_id),))
            changed = cur.rowcount > 0
        if changed:
            self._notifier.notify(TABLE)
        return changed

    def list_all(self) -> Sequence[Task]:
        return self._select()

    def list_for_employee(self, employee_id: int) -> Sequence[Task]:
        return self._select("WHERE employee_id=%s", (int(employee_id),))

    def list_by_status(self, status: TaskStatus) -> Sequence[Task]:
        return self._select("WHERE status=%s", (status.value,))

    def count_by_status(self, status: TaskStatus) -> int:
        return self._count("WHERE status=%s", (status.value,))

    def count_for_employee_by_status(self, employee_id: int, status: TaskStatus) -> int:
        return self._count("WHERE employee_id=%s AND status=%s", (int(employee_id), status.value))

    def observe_all(self, callback: Callable[[Sequence[Task]], None]) -> Tuple[Sequence[Task], Subscription]:
        return self._notifier.subscribe(TABLE, self.list_all, callback)

    def observe_for_employee(
        self, employee_id: int, callback: Callable[[Sequence[Task]], None]
    ) -> Tuple[Sequence[Task], Subscription]:
        return self._notifier.subscribe(TABLE, lambda: self.list_for_employee(employee_id), callback)
