from __future__ import annotations

from ..repository import AttendanceRepository
from .base import AttendanceMark, AttendanceWriteStrategy


class AppendStrategy(AttendanceWriteStrategy):
    """Always insert a new row, keeping earlier marks for the day."""

    def write(self, repo: AttendanceRepository, mark: AttendanceMark) -> int:
        return repo.create_record(
            employee_id=mark.employee_id,
            work_date=mark.work_date,
            check_in_time=mark.check_in_time,
            check_out_time=mark.check_out_time,
            status=mark.status,
            remarks=mark.remarks,
        )
