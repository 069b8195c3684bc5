from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Protocol, Sequence, Tuple

from ..common.events import Subscription
from ..core.enums import TaskPriority, TaskStatus
from .model import Task


class TaskRepository(Protocol):
    def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_task(self, task: Task) -> bool:
        raise NotImplementedError

    def update_status(self, task_id: int, status: TaskStatus) -> bool:
        raise NotImplementedError

    def delete_by_id(self, task_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Task]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Task]:
        raise NotImplementedError

    def list_by_status(self, status: TaskStatus) -> Sequence[Task]:
        raise NotImplementedError

    def count_by_status(self, status: TaskStatus) -> int:
        raise NotImplementedError

    def count_for_employee_by_status(self, employee_id: int, status: TaskStatus) -> int:
        raise NotImplementedError

    def observe_all(self, callback: Callable[[Sequence[Task]], None]) -> Tuple[Sequence[Task], Subscription]:
        raise NotImplementedError

    def observe_for_employee(
        self, employee_id: int, callback: Callable[[Sequence[Task]], None]
    ) -> Tuple[Sequence[Task], Subscription]:
        raise NotImplementedError
