from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import to_date, today_local
from ..common.validators import require_non_empty, require_rating
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .model import Review
from .repository import ReviewRepository


class ReviewService:
    """Use case: record and read performance reviews.

    Reviews are an append-only record; there is no edit path.
    """

    def __init__(self, reviews: ReviewRepository, users: UserRepository):
        self._reviews = reviews
        self._users = users

    def add_review(
        self,
        *,
        employee_id: int,
        quality: float,
        communication: float,
        innovation: float,
        timeliness: float,
        attendance: float,
        reviewed_by: str,
        overall_rating: Optional[float] = None,
        remarks: str = "",
        review_date: date | str | None = None,
    ) -> int:
        if not self._users.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")

        scores = {
            "quality": require_rating(quality, "Quality"),
            "communication": require_rating(communication, "Communication"),
            "innovation": require_rating(innovation, "Innovation"),
            "timeliness": require_rating(timeliness, "Timeliness"),
            "attendance": require_rating(attendance, "Attendance"),
        }
        if overall_rating is None:
            overall = round(sum(scores.values()) / len(scores), 2)
        else:
            overall = require_rating(overall_rating, "Overall rating")

        reviewed_on = to_date(review_date) if review_date else today_local()
        if reviewed_on is None:
            raise ValidationError("Review date must be YYYY-MM-DD")

        return self._reviews.create_review(
            employee_id=int(employee_id),
            review_date=reviewed_on,
            overall_rating=overall,
            remarks=(remarks or "").strip(),
            reviewed_by=require_non_empty(reviewed_by, "Reviewer"),
            **scores,
        )

    def get_review(self, review_id: int) -> Optional[Review]:
        return self._reviews.get_by_id(review_id)

    def list_reviews(self) -> Sequence[Review]:
        return self._reviews.list_all()

    def list_for_employee(self, employee_id: int) -> Sequence[Review]:
        """Newest first."""
        return self._reviews.list_for_employee(employee_id)

    def average_for_employee(self, employee_id: int) -> float:
        return self._reviews.average_for_employee(employee_id)

    def latest_for_employee(self, employee_id: int) -> Optional[Review]:
        reviews = self._reviews.list_for_employee(employee_id)
        return reviews[0] if reviews else None
