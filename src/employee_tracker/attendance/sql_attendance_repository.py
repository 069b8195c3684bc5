from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Sequence, Tuple

from ..common.datetime_utils import to_date
from ..common.events import ChangeNotifier, Subscription
from ..core.enums import AttendanceStatus
from ..database.base import db_cursor, fetchall, fetchone
from ..database.connection import DatabaseConnection
from .model import AttendanceRecord
from .repository import AttendanceRepository

TABLE = "attendance"
_COLUMNS = "attendance_id, employee_id, work_date, check_in_time, check_out_time, status, remarks"


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["attendance_id"]),
        employee_id=int(row["employee_id"]),
        work_date=to_date(row.get("work_date")),
        check_in_time=row.get("check_in_time") or "",
        check_out_time=row.get("check_out_time") or "",
        status=AttendanceStatus(row["status"]),
        remarks=row.get("remarks") or "",
    )


class SQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection, notifier: ChangeNotifier):
        self._conn_factory = conn_factory
        self._notifier = notifier

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s AND work_date=%s
                ORDER BY attendance_id DESC
                LIMIT 1
                """,
                (int(employee_id), work_date),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, work_date, check_in_time, check_out_time, status, remarks)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, check_in_time, check_out_time, status.value, remarks),
            )
            new_id = int(cur.lastrowid)
        self._notifier.notify(TABLE)
        return new_id

    def update_record(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET employee_id=%s, work_date=%s, check_in_time=%s, check_out_time=%s, status=%s, remarks=%s
                WHERE attendance_id=%s
                """,
                (
                    record.employee_id,
                    record.work_date,
                    record.check_in_time,
                    record.check_out_time,
                    record.status.value,
                    record.remarks,
                    record.attendance_id,
                ),
            )
            changed = cur.rowcount > 0
        if changed:
            self._notifier.notify(TABLE)
        return changed

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
            changed = cur.rowcount > 0
        if changed:
            self._notifier.notify(TABLE)
        return changed

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance ORDER BY work_date DESC, attendance_id DESC")
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM attendance
            WHERE employee_id=%s
            ORDER BY work_date DESC, attendance_id DESC
        """
        params: tuple = (int(employee_id),)
        if limit is not None:
            sql += " LIMIT %s"
            params += (int(limit),)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_record(r) for r in fetchall(cur)]

    def observe_for_employee(
        self, employee_id: int, callback: Callable[[Sequence[AttendanceRecord]], None]
    ) -> Tuple[Sequence[AttendanceRecord], Subscription]:
        return self._notifier.subscribe(TABLE, lambda: self.list_for_employee(employee_id), callback)

    def observe_all(
        self, callback: Callable[[Sequence[AttendanceRecord]], None]
    ) -> Tuple[Sequence[AttendanceRecord], Subscription]:
        return self._notifier.subscribe(TABLE, self.list_all, callback)
