from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_by_ids(self, attendance_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

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
        """Insert a record.

        Raises DuplicateRecordError when (user_id, work_date) already exists.
        """

        raise NotImplementedError

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
        """Create the (user_id, work_date) record or overwrite it in place.

        Returns (attendance_id, created).
        """

        raise NotImplementedError

    def validate_pending(self, *, attendance_ids: Sequence[int], validator_id: int, validated_at: datetime) -> int:
        """PENDING -> VALIDATED for the given ids; returns how many rows changed."""

        raise NotImplementedError

    def list_for_day(self, *, work_date: date, user_ids: Optional[Sequence[int]] = None) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        project_id: Optional[int] = None,
        user_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
