from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Review:
    """Domain entity: a performance review. Write-once."""

    review_id: int
    employee_id: int
    review_date: Optional[date]
    quality: float
    communication: float
    innovation: float
    timeliness: float
    attendance: float
    overall_rating: float
    remarks: str
    reviewed_by: str

    def to_dict(self) -> dict:
        return {
            "review_id": self.review_id,
            "employee_id": self.employee_id,
            "date": self.review_date.isoformat() if self.review_date else None,
            "quality": self.quality,
            "communication": self.communication,
            "innovation": self.innovation,
            "timeliness": self.timeliness,
            "attendance": self.attendance,
            "overall_rating": self.overall_rating,
            "remarks": self.remarks,
            "reviewed_by": self.reviewed_by,
        }
