from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Protocol, Sequence, Tuple

from ..common.events import Subscription
from .model import Review


class ReviewRepository(Protocol):
    """Reviews are immutable once stored; there is no update method."""

    def get_by_id(self, review_id: int) -> Optional[Review]:
        raise NotImplementedError

    def create_review(
        self,
        *,
        employee_id: int,
        review_date: date,
        quality: float,
        communication: float,
        innovation: float,
        timeliness: float,
        attendance: float,
        overall_rating: float,
        remarks: str,
        reviewed_by: str,
    ) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[Review]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Review]:
        raise NotImplementedError

    def average_for_employee(self, employee_id: int) -> float:
        raise NotImplementedError

    def observe_all(self, callback: Callable[[Sequence[Review]], None]) -> Tuple[Sequence[Review], Subscription]:
        raise NotImplementedError

    def observe_for_employee(
        self, employee_id: int, callback: Callable[[Sequence[Review]], None]
    ) -> Tuple[Sequence[Review], Subscription]:
        raise NotImplementedError
