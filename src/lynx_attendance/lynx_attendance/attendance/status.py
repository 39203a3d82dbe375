"""Attendance status rules.

Entry points are asymmetric: PENDING comes only from a self check-in,
the administrative statuses come from a direct write or a QR scan, and
VALIDATED is reachable only from PENDING.
"""
from __future__ import annotations

from ..core.enums import AttendanceStatus
from ..core.exceptions import IllegalTransitionError

ADMINISTRATIVE_STATUSES = frozenset(
    {
        AttendanceStatus.PRESENT,
        AttendanceStatus.ABSENT,
        AttendanceStatus.LATE,
        AttendanceStatus.ON_LEAVE,
        AttendanceStatus.SICK,
    }
)


def require_administrative(status: AttendanceStatus) -> AttendanceStatus:
    if status not in ADMINISTRATIVE_STATUSES:
        raise IllegalTransitionError(f"Status {status.value} cannot be set directly")
    return status


def can_validate(status: AttendanceStatus) -> bool:
    return status == AttendanceStatus.PENDING
