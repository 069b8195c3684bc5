from __future__ import annotations

from dataclasses import replace

from ..repository import AttendanceRepository
from .append_strategy import AppendStrategy
from .base import AttendanceMark, AttendanceWriteStrategy


class UpsertStrategy(AttendanceWriteStrategy):
    """Overwrite the latest row for (employee, day) if one exists, else insert."""

    def write(self, repo: AttendanceRepository, mark: AttendanceMark) -> int:
        existing = repo.get_for_employee_and_date(mark.employee_id, mark.work_date)
        if not existing:
            return AppendStrategy().write(repo, mark)

        repo.update_record(
            replace(
                existing,
                check_in_time=mark.check_in_time,
                check_out_time=mark.check_out_time,
                status=mark.status,
                remarks=mark.remarks,
            )
        )
        return existing.attendance_id
