from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date

from ...core.enums import AttendanceStatus
from ..repository import AttendanceRepository


@dataclass(frozen=True)
class AttendanceMark:
    employee_id: int
    work_date: date
    check_in_time: str
    check_out_time: str
    status: AttendanceStatus
    remarks: str = ""


class AttendanceWriteStrategy(ABC):
    """Strategy Pattern: decide how a mark is written next to existing rows for the same day."""

    @abstractmethod
    def write(self, repo: AttendanceRepository, mark: AttendanceMark) -> int:
        """Persist the mark and return the id of the affected row."""

        raise NotImplementedError
