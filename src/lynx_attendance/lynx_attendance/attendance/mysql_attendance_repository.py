from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders, unique_violation_as_duplicate
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    attendance_id, user_id, work_date, check_in_time, check_out_time, status,
    latitude, longitude, note, project_id, validated_by, updated_at
"""

_REPORT_SELECT = """
    SELECT
        ar.attendance_id, ar.user_id, u.first_name, u.last_name,
        ar.work_date, ar.check_in_time, ar.check_out_time, ar.status, ar.note,
        ar.project_id, p.name AS project_name,
        CONCAT(v.first_name, ' ', v.last_name) AS validator_name
    FROM attendance_records ar
    JOIN users u ON u.user_id = ar.user_id
    LEFT JOIN projects p ON p.project_id = ar.project_id
    LEFT JOIN users v ON v.user_id = ar.validated_by
"""


def _opt_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        latitude=_opt_float(r.get("latitude")),
        longitude=_opt_float(r.get("longitude")),
        note=r.get("note"),
        project_id=r.get("project_id"),
        validated_by=r.get("validated_by"),
        updated_at=r.get("updated_at"),
    )


def _to_report_row(r: Dict[str, Any]) -> AttendanceReportRow:
    return AttendanceReportRow(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        note=r.get("note"),
        project_id=r.get("project_id"),
        project_name=r.get("project_name"),
        validator_name=r.get("validator_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_by_ids(self, attendance_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        ids = [int(i) for i in attendance_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE attendance_id IN ({in_placeholders(ids)})
                ORDER BY attendance_id
                """,
                tuple(ids),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: Optional[datetime],
        status: AttendanceStatus,
        note: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        project_id: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            with unique_violation_as_duplicate():
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        user_id, work_date, check_in_time, status, note, latitude, longitude, project_id
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), work_date, check_in_time, status.value, note, latitude, longitude, project_id),
                )
            return int(cur.lastrowid)

    def upsert_for_day(
        self,
        *,
        user_id: int,
        work_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        note: Optional[str] = None,
    ) -> tuple[int, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT attendance_id FROM attendance_records WHERE user_id=%s AND work_date=%s FOR UPDATE",
                (int(user_id), work_date),
            )
            existing = fetchone(cur)

            cur.execute(
                """
                INSERT INTO attendance_records(user_id, work_date, check_in_time, check_out_time, status, note)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    check_in_time=VALUES(check_in_time),
                    check_out_time=VALUES(check_out_time),
                    status=VALUES(status),
                    note=VALUES(note),
                    validated_by=IF(VALUES(status)='VALIDATED', validated_by, NULL)
                """,
                (int(user_id), work_date, check_in_time, check_out_time, status.value, note),
            )
            if existing:
                return int(existing["attendance_id"]), False

            # If it was an update, lastrowid can be 0; fetch attendance_id.
            if cur.lastrowid:
                return int(cur.lastrowid), True

            cur.execute(
                "SELECT attendance_id FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return (int(r["attendance_id"]) if r else 0), r is not None

    def validate_pending(self, *, attendance_ids: Sequence[int], validator_id: int, validated_at: datetime) -> int:
        ids = [int(i) for i in attendance_ids]
        if not ids:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE attendance_records
                SET status=%s, validated_by=%s, updated_at=%s
                WHERE status=%s AND attendance_id IN ({in_placeholders(ids)})
                """,
                (
                    AttendanceStatus.VALIDATED.value,
                    int(validator_id),
                    validated_at,
                    AttendanceStatus.PENDING.value,
                    *ids,
                ),
            )
            return int(cur.rowcount)

    def list_for_day(self, *, work_date: date, user_ids: Optional[Sequence[int]] = None) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date=%s"]
        params: list[object] = [work_date]

        if user_ids is not None:
            ids = [int(u) for u in user_ids]
            if not ids:
                return []
            clauses.append(f"ar.user_id IN ({in_placeholders(ids)})")
            params.extend(ids)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_REPORT_SELECT}
                WHERE {where}
                ORDER BY ar.check_in_time ASC, ar.attendance_id ASC
                """,
                tuple(params),
            )
            return [_to_report_row(r) for r in fetchall(cur)]

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        project_id: Optional[int] = None,
        user_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if project_id is not None:
            clauses.append("ar.project_id=%s")
            params.append(int(project_id))
        if user_ids is not None:
            ids = [int(u) for u in user_ids]
            if not ids:
                return []
            clauses.append(f"ar.user_id IN ({in_placeholders(ids)})")
            params.extend(ids)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_REPORT_SELECT}
                WHERE {where}
                ORDER BY ar.work_date DESC, u.last_name ASC, u.first_name ASC, ar.attendance_id ASC
                """,
                tuple(params),
            )
            return [_to_report_row(r) for r in fetchall(cur)]
