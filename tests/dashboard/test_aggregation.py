from __future__ import annotations

from datetime import date, timedelta

import pytest

from employee_tracker.core.enums import Role, TaskPriority, TaskStatus
from employee_tracker.dashboard.aggregation import (
    average_rating,
    completion_percentage,
    count_tasks,
    rating_label,
    recent_activity,
    relative_time,
    top_performers,
)
from employee_tracker.reviews.model import Review
from employee_tracker.tasks.model import Task
from employee_tracker.users.model import User


def make_task(task_id: int, status: TaskStatus, *, employee_id: int = 1, deadline=None, title: str = "T") -> Task:
    return Task(
        task_id=task_id,
        employee_id=employee_id,
        title=title,
        description="",
        priority=TaskPriority.MEDIUM,
        status=status,
        deadline=deadline,
        assigned_date=date(2026, 1, 1),
    )


def make_review(review_id: int, employee_id: int, rating: float, review_date=None) -> Review:
    return Review(
        review_id=review_id,
        employee_id=employee_id,
        review_date=review_date,
        quality=rating,
        communication=rating,
        innovation=rating,
        timeliness=rating,
        attendance=rating,
        overall_rating=rating,
        remarks="",
        reviewed_by="Admin User",
    )


def make_user(user_id: int, name: str, joining_date=None, department: str = "Design") -> User:
    return User(
        user_id=user_id,
        email=f"{name.lower()}@company.com",
        password_hash="x",
        name=name,
        role=Role.EMPLOYEE,
        designation="Engineer",
        department=department,
        joining_date=joining_date,
    )


def test_counts_one_task_per_status():
    tasks = [make_task(1, TaskStatus.PENDING), make_task(2, TaskStatus.ACTIVE), make_task(3, TaskStatus.DONE)]

    counters = count_tasks(tasks)

    assert (counters.pending, counters.active, counters.done, counters.total) == (1, 1, 1, 3)
    assert counters.completion_percentage == 33


def test_counters_always_sum_to_total():
    statuses = [TaskStatus.DONE] * 4 + [TaskStatus.PENDING] * 2 + [TaskStatus.ACTIVE]
    counters = count_tasks(make_task(i, s) for i, s in enumerate(statuses))

    assert counters.pending + counters.active + counters.done == counters.total == 7
    assert counters.completion_percentage == 57


@pytest.mark.parametrize(
    "done,total,expected",
    [(0, 0, 0), (5, 0, 0), (0, 4, 0), (1, 3, 33), (2, 3, 66), (3, 3, 100)],
)
def test_completion_percentage_floors(done, total, expected):
    assert completion_percentage(done, total) == expected


def test_average_rating_empty_is_zero():
    assert average_rating([]) == 0.0


def test_average_rating_is_mean_of_overall():
    reviews = [make_review(1, 1, 4.0), make_review(2, 2, 3.0), make_review(3, 1, 5.0)]
    assert average_rating(reviews) == pytest.approx(4.0)


def test_rating_labels():
    assert rating_label(4.5) == "Excellent"
    assert rating_label(3.5) == "Good"
    assert rating_label(3.49) == "Needs Improvement"


def test_top_performers_sorted_and_limited():
    reviews = [
        make_review(1, 10, 3.0),
        make_review(2, 11, 4.8),
        make_review(3, 12, 4.0),
        make_review(4, 13, 2.0),
        make_review(5, 10, 5.0),
    ]

    top = top_performers(reviews)

    assert [p.employee_id for p in top] == [11, 10, 12]
    assert top[1].average_rating == pytest.approx(4.0)
    assert top[1].review_count == 2
    assert all(p.employee_id in {r.employee_id for r in reviews} for p in top)


def test_top_performers_ties_keep_first_seen_order():
    reviews = [make_review(1, 7, 4.0), make_review(2, 3, 4.0), make_review(3, 5, 4.0), make_review(4, 9, 4.0)]

    assert [p.employee_id for p in top_performers(reviews)] == [7, 3, 5]


def test_top_performers_empty():
    assert top_performers([]) == []


@pytest.mark.parametrize(
    "days,label",
    [(0, "Today"), (1, "Yesterday"), (3, "3d ago"), (6, "6d ago"), (7, "1w ago"), (29, "4w ago"), (30, "1mo ago"), (95, "3mo ago")],
)
def test_relative_time_thresholds(fixed_today, days, label):
    assert relative_time(fixed_today - timedelta(days=days), fixed_today) == label


def test_relative_time_accepts_iso_strings(fixed_today):
    assert relative_time("2026-01-31", fixed_today) == "Yesterday"


@pytest.mark.parametrize("value", [None, "", "not-a-date", "2026-13-45"])
def test_relative_time_unparseable_is_unknown(fixed_today, value):
    assert relative_time(value, fixed_today) == "Unknown"


def test_recent_activity_merges_and_orders(fixed_today):
    employees = [
        make_user(1, "Niranjan", fixed_today - timedelta(days=40)),
        make_user(2, "Manoj", fixed_today - timedelta(days=3)),
        make_user(3, "Krish", fixed_today - timedelta(days=100)),
    ]
    tasks = [
        make_task(1, TaskStatus.DONE, employee_id=1, deadline=fixed_today - timedelta(days=1), title="Schema"),
        make_task(2, TaskStatus.DONE, employee_id=99, deadline=fixed_today - timedelta(days=10), title="Docs"),
        make_task(3, TaskStatus.PENDING, employee_id=2, deadline=fixed_today, title="Login"),
    ]
    reviews = [make_review(1, 2, 4.5, fixed_today), make_review(2, 3, 3.0, fixed_today - timedelta(days=60))]

    feed = recent_activity(employees, tasks, reviews, today=fixed_today)

    assert len(feed) == 5
    assert [a.time_label for a in feed] == ["Today", "Yesterday", "3d ago", "1w ago", "1mo ago"]
    assert feed[0].subtitle == "Manoj rated 4.5/5.0"
    assert feed[1].subtitle == "Schema by Niranjan"
    assert feed[3].subtitle == "Docs by Unknown"
    assert all(a.subtitle != "Login by Manoj" for a in feed)


def test_recent_activity_unknown_dates_sort_last(fixed_today):
    employees = [make_user(1, "Ram", None), make_user(2, "Krish", fixed_today - timedelta(days=2))]

    feed = recent_activity(employees, [], [], today=fixed_today)

    assert [a.time_label for a in feed] == ["2d ago", "Unknown"]


def test_recent_activity_empty(fixed_today):
    assert recent_activity([], [], [], today=fixed_today) == []
