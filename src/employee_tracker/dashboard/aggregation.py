"""Derived values shown on the dashboards.

All functions here are pure: they take already loaded entities and return
display-ready values, so they can be recomputed whenever a live query
delivers a new snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import DateLike, to_date
from ..core.constants import (
    RECENT_ACTIVITY_LIMIT,
    RECENT_PER_SOURCE,
    TOP_PERFORMERS_LIMIT,
    UNKNOWN_LABEL,
)
from ..core.enums import TaskStatus
from ..reviews.model import Review
from ..tasks.model import Task
from ..users.model import User


@dataclass(frozen=True)
class TaskCounters:
    pending: int
    active: int
    done: int
    total: int

    @property
    def completion_percentage(self) -> int:
        return completion_percentage(self.done, self.total)

    def to_dict(self) -> dict:
        return {
            "pending": self.pending,
            "active": self.active,
            "done": self.done,
            "total": self.total,
            "completion_percentage": self.completion_percentage,
        }


@dataclass(frozen=True)
class PerformerRank:
    employee_id: int
    average_rating: float
    review_count: int


@dataclass(frozen=True)
class ActivityItem:
    kind: str
    title: str
    subtitle: str
    time_label: str
    days_ago: Optional[int]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "title": self.title,
            "subtitle": self.subtitle,
            "time": self.time_label,
        }


def completion_percentage(done: int, total: int) -> int:
    if total <= 0:
        return 0
    return (done * 100) // total


def count_tasks(tasks: Iterable[Task]) -> TaskCounters:
    pending = active = done = total = 0
    for t in tasks:
        total += 1
        if t.status == TaskStatus.PENDING:
            pending += 1
        elif t.status == TaskStatus.ACTIVE:
            active += 1
        elif t.status == TaskStatus.DONE:
            done += 1
    return TaskCounters(pending=pending, active=active, done=done, total=total)


def average_rating(reviews: Iterable[Review]) -> float:
    ratings = [float(r.overall_rating) for r in reviews]
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def rating_label(rating: float) -> str:
    if rating >= 4.5:
        return "Excellent"
    if rating >= 3.5:
        return "Good"
    return "Needs Improvement"


def top_performers(reviews: Iterable[Review], limit: int = TOP_PERFORMERS_LIMIT) -> list[PerformerRank]:
    """Rank employees by their mean overall rating.

    Ties keep the order in which each employee first appears in ``reviews``.
    """

    grouped: dict[int, list[float]] = {}
    for r in reviews:
        grouped.setdefault(r.employee_id, []).append(float(r.overall_rating))

    ranks = [
        PerformerRank(employee_id=eid, average_rating=sum(vals) / len(vals), review_count=len(vals))
        for eid, vals in grouped.items()
    ]
    ranks.sort(key=lambda p: p.average_rating, reverse=True)
    return ranks[: max(0, limit)]


def days_ago(value: DateLike, today: date) -> Optional[int]:
    d = to_date(value)
    if d is None:
        return None
    return (today - d).days


def relative_time(value: DateLike, today: date) -> str:
    days = days_ago(value, today)
    if days is None:
        return UNKNOWN_LABEL
    if days < 1:
        return "Today"
    if days < 2:
        return "Yesterday"
    if days < 7:
        return f"{days}d ago"
    if days < 30:
        return f"{days // 7}w ago"
    return f"{days // 30}mo ago"


def _name_of(employee_id: int, by_id: Mapping[int, User]) -> str:
    user = by_id.get(employee_id)
    return user.name if user else UNKNOWN_LABEL


def _newest_first(items: Sequence, key) -> list:
    # Unknown dates sink to the end.
    return sorted(items, key=lambda x: (key(x) is not None, key(x) or date.min), reverse=True)


def recent_activity(
    employees: Sequence[User],
    tasks: Sequence[Task],
    reviews: Sequence[Review],
    *,
    today: date,
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> list[ActivityItem]:
    """Merge recent joins, task completions and reviews into one feed.

    Ordered most recent first; items with an unknown date come last and
    equal ages keep their merge order (joins, completions, reviews).
    """

    by_id = {u.user_id: u for u in employees}
    items: list[ActivityItem] = []

    for u in _newest_first(employees, lambda u: u.joining_date)[:RECENT_PER_SOURCE]:
        items.append(
            ActivityItem(
                kind="employee",
                title="New employee added",
                subtitle=f"{u.name} joined {u.department}",
                time_label=relative_time(u.joining_date, today),
                days_ago=days_ago(u.joining_date, today),
            )
        )

    done = [t for t in tasks if t.status == TaskStatus.DONE]
    for t in _newest_first(done, lambda t: t.deadline)[:RECENT_PER_SOURCE]:
        items.append(
            ActivityItem(
                kind="task",
                title="Task completed",
                subtitle=f"{t.title} by {_name_of(t.employee_id, by_id)}",
                time_label=relative_time(t.deadline, today),
                days_ago=days_ago(t.deadline, today),
            )
        )

    for r in _newest_first(reviews, lambda r: r.review_date)[:RECENT_PER_SOURCE]:
        items.append(
            ActivityItem(
                kind="review",
                title="Performance review",
                subtitle=f"{_name_of(r.employee_id, by_id)} rated {r.overall_rating:.1f}/5.0",
                time_label=relative_time(r.review_date, today),
                days_ago=days_ago(r.review_date, today),
            )
        )

    items.sort(key=lambda a: (a.days_ago is None, a.days_ago if a.days_ago is not None else 0))
    return items[: max(0, limit)]
