"""Live view-state objects consumed by the presentation layer.

Each state object subscribes to repository live queries, recomputes its
derived values whenever a snapshot arrives and tells its listeners. Call
``close()`` (or use it as a context manager) to release the subscriptions.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import today_local
from ..common.events import Subscription
from ..core.constants import UNKNOWN_LABEL
from ..messages.model import Message
from ..messages.repository import MessageRepository
from ..reviews.model import Review
from ..reviews.repository import ReviewRepository
from ..tasks.model import Task
from ..tasks.repository import TaskRepository
from ..users.model import User
from ..users.repository import UserRepository
from .aggregation import (
    ActivityItem,
    PerformerRank,
    TaskCounters,
    average_rating,
    count_tasks,
    recent_activity,
    top_performers,
)

logger = logging.getLogger(__name__)


class _LiveState:
    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self._listeners: list[Callable[["_LiveState"], None]] = []

    def add_listener(self, listener: Callable[["_LiveState"], None]) -> None:
        if not callable(listener):
            raise ValueError("Listener must be callable")
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[["_LiveState"], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Error in view-state listener")

    @property
    def is_open(self) -> bool:
        return any(s.active for s in self._subscriptions)

    def close(self) -> None:
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions.clear()
        self._listeners.clear()

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class AdminDashboardState(_LiveState):
    """Employee count, task counters, ratings and the activity feed for admins."""

    def __init__(
        self,
        users: UserRepository,
        tasks: TaskRepository,
        reviews: ReviewRepository,
        *,
        today: Optional[Callable[[], date]] = None,
    ):
        super().__init__()
        self._today = today or today_local

        self._employees, sub = users.observe_employees(self._on_employees)
        self._subscriptions.append(sub)
        self._tasks, sub = tasks.observe_all(self._on_tasks)
        self._subscriptions.append(sub)
        self._reviews, sub = reviews.observe_all(self._on_reviews)
        self._subscriptions.append(sub)
        self._recompute()

    def _on_employees(self, employees: Sequence[User]) -> None:
        self._employees = employees
        self._recompute()
        self._emit()

    def _on_tasks(self, tasks: Sequence[Task]) -> None:
        self._tasks = tasks
        self._recompute()
        self._emit()

    def _on_reviews(self, reviews: Sequence[Review]) -> None:
        self._reviews = reviews
        self._recompute()
        self._emit()

    def _recompute(self) -> None:
        self.task_counters: TaskCounters = count_tasks(self._tasks)
        self.average_rating: float = average_rating(self._reviews)
        self.top_performers: list[PerformerRank] = top_performers(self._reviews)
        self.recent_activity: list[ActivityItem] = recent_activity(
            self._employees, self._tasks, self._reviews, today=self._today()
        )

    @property
    def employees(self) -> Sequence[User]:
        return self._employees

    @property
    def employee_count(self) -> int:
        return len(self._employees)

    @property
    def review_count(self) -> int:
        return len(self._reviews)

    def employee_name(self, employee_id: int) -> str:
        for u in self._employees:
            if u.user_id == employee_id:
                return u.name
        return UNKNOWN_LABEL

    def to_dict(self) -> dict:
        return {
            "employee_count": self.employee_count,
            "review_count": self.review_count,
            "tasks": self.task_counters.to_dict(),
            "average_rating": round(self.average_rating, 2),
            "top_performers": [
                {
                    "employee_id": p.employee_id,
                    "name": self.employee_name(p.employee_id),
                    "average_rating": round(p.average_rating, 2),
                    "review_count": p.review_count,
                }
                for p in self.top_performers
            ],
            "recent_activity": [a.to_dict() for a in self.recent_activity],
        }


class EmployeeHomeState(_LiveState):
    """One employee's task counters, rating summary and unread message count."""

    def __init__(
        self,
        employee_id: int,
        tasks: TaskRepository,
        reviews: ReviewRepository,
        messages: MessageRepository,
    ):
        super().__init__()
        self.employee_id = employee_id

        self.tasks, sub = tasks.observe_for_employee(employee_id, self._on_tasks)
        self._subscriptions.append(sub)
        self.reviews, sub = reviews.observe_for_employee(employee_id, self._on_reviews)
        self._subscriptions.append(sub)
        self.unread_count, sub = messages.observe_unread_count(employee_id, self._on_unread)
        self._subscriptions.append(sub)

    def _on_tasks(self, tasks: Sequence[Task]) -> None:
        self.tasks = tasks
        self._emit()

    def _on_reviews(self, reviews: Sequence[Review]) -> None:
        self.reviews = reviews
        self._emit()

    def _on_unread(self, count: int) -> None:
        self.unread_count = count
        self._emit()

    @property
    def task_counters(self) -> TaskCounters:
        return count_tasks(self.tasks)

    @property
    def average_rating(self) -> float:
        return average_rating(self.reviews)

    @property
    def latest_review(self) -> Optional[Review]:
        return self.reviews[0] if self.reviews else None

    def to_dict(self) -> dict:
        latest = self.latest_review
        return {
            "employee_id": self.employee_id,
            "tasks": self.task_counters.to_dict(),
            "recent_tasks": [t.to_dict() for t in list(self.tasks)[:3]],
            "average_rating": round(self.average_rating, 2),
            "latest_review": latest.to_dict() if latest else None,
            "unread_count": self.unread_count,
        }


class ConversationState(_LiveState):
    """An open chat between the current user and one other user.

    Opening the conversation marks the incoming messages as read.
    """

    def __init__(self, user_id: int, other_id: int, messages: MessageRepository):
        super().__init__()
        self.user_id = user_id
        self.other_id = other_id
        self._messages = messages

        messages.mark_conversation_read(user_id, other_id)
        self.messages, sub = messages.observe_conversation(user_id, other_id, self._on_messages)
        self._subscriptions.append(sub)
        self.unread_count, sub = messages.observe_unread_count(user_id, self._on_unread)
        self._subscriptions.append(sub)

    def _on_messages(self, messages: Sequence[Message]) -> None:
        self.messages = messages
        self._emit()

    def _on_unread(self, count: int) -> None:
        self.unread_count = count
        self._emit()

    def mark_read(self) -> int:
        return self._messages.mark_conversation_read(self.user_id, self.other_id)
