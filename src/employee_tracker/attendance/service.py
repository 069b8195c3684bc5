from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import to_date, today_local
from ..core.constants import DEFAULT_CHECK_IN, DEFAULT_CHECK_OUT, DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendancePolicy, AttendanceStatus
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .strategies.base import AttendanceMark


class AttendanceService:
    """Use case: admin marks attendance; employees read their history.

    Callers choose whether a second mark for the same day appends a row or
    replaces the existing one.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        default_check_in: str = DEFAULT_CHECK_IN,
        default_check_out: str = DEFAULT_CHECK_OUT,
    ):
        self._attendance = attendance
        self._users = users
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._default_check_in = default_check_in
        self._default_check_out = default_check_out

    def mark_attendance(
        self,
        *,
        employee_id: int,
        policy: AttendancePolicy,
        status: AttendanceStatus | str = AttendanceStatus.PRESENT,
        work_date: date | str | None = None,
        check_in_time: Optional[str] = None,
        check_out_time: Optional[str] = None,
        remarks: str = "",
    ) -> int:
        if not self._users.get_by_id(employee_id):
            raise ValidationError("Employee does not exist")

        mark = self._build_mark(
            employee_id=employee_id,
            status=status,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            remarks=remarks,
        )
        strategy = self._factory.for_policy(AttendancePolicy(policy))
        return strategy.write(self._attendance, mark)

    def mark_for_all(
        self,
        employee_ids: Iterable[int],
        *,
        policy: AttendancePolicy,
        status: AttendanceStatus | str = AttendanceStatus.PRESENT,
        work_date: date | str | None = None,
        check_in_time: Optional[str] = None,
        check_out_time: Optional[str] = None,
        remarks: str = "",
    ) -> list[int]:
        """Apply the same mark to several employees. Returns affected row ids."""

        return [
            self.mark_attendance(
                employee_id=eid,
                policy=policy,
                status=status,
                work_date=work_date,
                check_in_time=check_in_time,
                check_out_time=check_out_time,
                remarks=remarks,
            )
            for eid in employee_ids
        ]

    def history(self, employee_id: int, *, limit: Optional[int] = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_employee(employee_id, limit)

    def summary(self, employee_id: int) -> dict[str, int]:
        counts = {s.value: 0 for s in AttendanceStatus}
        for r in self._attendance.list_for_employee(employee_id):
            counts[r.status.value] += 1
        return counts

    def _build_mark(
        self,
        *,
        employee_id: int,
        status: AttendanceStatus | str,
        work_date: date | str | None,
        check_in_time: Optional[str],
        check_out_time: Optional[str],
        remarks: str,
    ) -> AttendanceMark:
        try:
            status = AttendanceStatus(status)
        except ValueError:
            raise ValidationError(f"Attendance status is not valid: {status!r}")

        day = to_date(work_date) if work_date else today_local()
        if day is None:
            raise ValidationError("Date must be YYYY-MM-DD")

        return AttendanceMark(
            employee_id=int(employee_id),
            work_date=day,
            check_in_time=(check_in_time or self._default_check_in).strip(),
            check_out_time=(check_out_time or self._default_check_out).strip(),
            status=status,
            remarks=(remarks or "").strip(),
        )
