from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Protocol, Sequence, Tuple

from ..common.events import Subscription
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: str,
        check_out_time: str,
        status: AttendanceStatus,
        remarks: str = "",
    ) -> int:
        raise NotImplementedError

    def update_record(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError

    def observe_for_employee(
        self, employee_id: int, callback: Callable[[Sequence[AttendanceRecord]], None]
    ) -> Tuple[Sequence[AttendanceRecord], Subscription]:
        raise NotImplementedError

    def observe_all(
        self, callback: Callable[[Sequence[AttendanceRecord]], None]
    ) -> Tuple[Sequence[AttendanceRecord], Subscription]:
        raise NotImplementedError
