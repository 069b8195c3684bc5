from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Sequence, Tuple

from ..common.datetime_utils import to_date
from ..common.events import ChangeNotifier, Subscription
from ..database.base import db_cursor, fetchall, fetchone
from ..database.connection import DatabaseConnection
from .model import Review
from .repository import ReviewRepository

TABLE = "reviews"
_COLUMNS = (
    "review_id, employee_id, review_date, quality, communication, innovation, "
    "timeliness, attendance, overall_rating, remarks, reviewed_by"
)


def _to_review(row: dict) -> Review:
    return Review(
        review_id=int(row["review_id"]),
        employee_id=int(row["employee_id"]),
        review_date=to_date(row.get("review_date")),
        quality=float(row["quality"]),
        communication=float(row["communication"]),
        innovation=float(row["innovation"]),
        timeliness=float(row["timeliness"]),
        attendance=float(row["attendance"]),
        overall_rating=float(row["overall_rating"]),
        remarks=row.get("remarks") or "",
        reviewed_by=row.get("reviewed_by") or "",
    )


class SQLReviewRepository(ReviewRepository):
    def __init__(self, conn_factory: DatabaseConnection, notifier: ChangeNotifier):
        self._conn_factory = conn_factory
        self._notifier = notifier

    def get_by_id(self, review_id: int) -> Optional[Review]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM reviews WHERE review_id=%s", (int(review_id),))
            row = fetchone(cur)
            return _to_review(row) if row else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO reviews(employee_id, review_date, quality, communication, innovation,
                                    timeliness, attendance, overall_rating, remarks, reviewed_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    review_date,
                    quality,
                    communication,
                    innovation,
                    timeliness,
                    attendance,
                    overall_rating,
                    remarks,
                    reviewed_by,
                ),
            )
            new_id = int(cur.lastrowid)
        self._notifier.notify(TABLE)
        return new_id

    def list_all(self) -> Sequence[Review]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM reviews ORDER BY review_date DESC, review_id DESC")
            return [_to_review(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[Review]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM reviews WHERE employee_id=%s ORDER BY review_date DESC, review_id DESC",
                (int(employee_id),),
            )
            return [_to_review(r) for r in fetchall(cur)]

    def average_for_employee(self, employee_id: int) -> float:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT AVG(overall_rating) AS avg_rating FROM reviews WHERE employee_id=%s",
                (int(employee_id),),
            )
            row = fetchone(cur)
            if not row or row["avg_rating"] is None:
                return 0.0
            return float(row["avg_rating"])

    def observe_all(self, callback: Callable[[Sequence[Review]], None]) -> Tuple[Sequence[Review], Subscription]:
        return self._notifier.subscribe(TABLE, self.list_all, callback)

    def observe_for_employee(
        self, employee_id: int, callback: Callable[[Sequence[Review]], None]
    ) -> Tuple[Sequence[Review], Subscription]:
        return self._notifier.subscribe(TABLE, lambda: self.list_for_employee(employee_id), callback)
