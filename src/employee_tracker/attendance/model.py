from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark for an employee and day."""

    attendance_id: int
    employee_id: int
    work_date: Optional[date]
    check_in_time: str
    check_out_time: str
    status: AttendanceStatus
    remarks: str = ""

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat() if self.work_date else None,
            "check_in_time": self.check_in_time,
            "check_out_time": self.check_out_time,
            "status": self.status.value,
            "remarks": self.remarks,
        }
