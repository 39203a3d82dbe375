from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    note: Optional[str] = None
    project_id: Optional[int] = None
    validated_by: Optional[int] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for listings and reports (joined with user/project/validator names)."""

    attendance_id: int
    user_id: int
    first_name: str
    last_name: str
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    note: Optional[str] = None
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    validator_name: Optional[str] = None
