from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class Task:
    """Domain entity: a task assigned to one employee."""

    task_id: int
    employee_id: int
    title: str
    description: str
    priority: TaskPriority
    status: TaskStatus
    deadline: Optional[date]
    assigned_date: Optional[date]

    def to_dict(self) -> dict:
        return {
            "task_id": self.task_id,
            "employee_id": self.employee_id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "status": self.status.value,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "assigned_date": self.assigned_date.isoformat() if self.assigned_date else None,
        }
