from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import to_date, today_local
from ..common.validators import require_non_empty
from ..core.enums import TaskFilter, TaskPriority, TaskStatus
from ..core.exceptions import ValidationError
from ..dashboard.aggregation import TaskCounters, count_tasks
from ..users.repository import UserRepository
from .model import Task
from .repository import TaskRepository


def _as_enum(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not valid: {value!r}")


def filter_tasks(tasks: Iterable[Task], selected: TaskFilter, *, today: Optional[date] = None) -> list[Task]:
    today = today or today_local()
    if selected == TaskFilter.HIGH_PRIORITY:
        return [t for t in tasks if t.priority in (TaskPriority.HIGH, TaskPriority.CRITICAL)]
    if selected == TaskFilter.DUE_TODAY:
        return [t for t in tasks if t.deadline == today]
    if selected in (TaskFilter.PENDING, TaskFilter.ACTIVE, TaskFilter.DONE):
        status = TaskStatus(selected.value)
        return [t for t in tasks if t.status == status]
    return list(tasks)


class TaskService:
    """Use case: assign and track tasks."""

    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self._tasks = tasks
        self._users = users

    def assign_task(
        self,
        *,
        employee_id: int,
        title: str,
        description: str = "",
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        deadline: date | str | None = None,
        assigned_date: date | str | None = None,
        status: TaskStatus | str = TaskStatus.PENDING,
    ) -> int:
        title = require_non_empty(title, "Title")
        if not self._users.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")

        assigned = to_date(assigned_date) if assigned_date else today_local()
        due = to_date(deadline)
        if assigned is None or (deadline and due is None):
            raise ValidationError("Dates must be YYYY-MM-DD")
        if due is not None and due < assigned:
            raise ValidationError("Deadline cannot be before the assigned date")

        return self._tasks.create_task(
            employee_id=int(employee_id),
            title=title,
            description=(description or "").strip(),
            priority=_as_enum(TaskPriority, priority, "Priority"),
            status=_as_enum(TaskStatus, status, "Status"),
            deadline=due,
            assigned_date=assigned,
        )

    def update_task(
        self,
        task_id: int,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        priority: TaskPriority | str | None = None,
        status: TaskStatus | str | None = None,
        deadline: date | str | None = None,
        employee_id: Optional[int] = None,
    ) -> Task:
        task = self._require(task_id)
        changes: dict = {}
        if title is not None:
            changes["title"] = require_non_empty(title, "Title")
        if description is not None:
            changes["description"] = description.strip()
        if priority is not None:
            changes["priority"] = _as_enum(TaskPriority, priority, "Priority")
        if status is not None:
            changes["status"] = _as_enum(TaskStatus, status, "Status")
        if deadline is not None:
            due = to_date(deadline)
            if due is None:
                raise ValidationError("Dates must be YYYY-MM-DD")
            if task.assigned_date is not None and due < task.assigned_date:
                raise ValidationError("Deadline cannot be before the assigned date")
            changes["deadline"] = due
        if employee_id is not None:
            if not self._users.get_by_id(employee_id):
                raise ValidationError("Employee does not exist")
            changes["employee_id"] = int(employee_id)

        updated = replace(task, **changes)
        if changes and not self._tasks.update_task(updated):
            raise ValidationError("Updating task failed")
        return updated

    def update_status(self, task_id: int, status: TaskStatus | str) -> None:
        new_status = _as_enum(TaskStatus, status, "Status")
        if not self._tasks.update_status(task_id, new_status):
            raise ValidationError("Task does not exist")

    def delete_task(self, task_id: int) -> None:
        if not self._tasks.delete_by_id(task_id):
            raise ValidationError("Task does not exist")

    def get_task(self, task_id: int) -> Optional[Task]:
        return self._tasks.get_by_id(task_id)

    def list_tasks(self, selected: TaskFilter = TaskFilter.ALL, *, today: Optional[date] = None) -> list[Task]:
        return filter_tasks(self._tasks.list_all(), selected, today=today)

    def list_for_employee(
        self, employee_id: int, selected: TaskFilter = TaskFilter.ALL, *, today: Optional[date] = None
    ) -> list[Task]:
        return filter_tasks(self._tasks.list_for_employee(employee_id), selected, today=today)

    def list_by_status(self, status: TaskStatus | str) -> Sequence[Task]:
        return self._tasks.list_by_status(_as_enum(TaskStatus, status, "Status"))

    def counters(self, employee_id: Optional[int] = None) -> TaskCounters:
        if employee_id is None:
            return count_tasks(self._tasks.list_all())
        return count_tasks(self._tasks.list_for_employee(employee_id))

    def _require(self, task_id: int) -> Task:
        task = self._tasks.get_by_id(task_id)
        if not task:
            raise ValidationError("Task does not exist")
        return task
