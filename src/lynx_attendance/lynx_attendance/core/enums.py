from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Site roles used for authorization."""

    ADMIN = "ADMIN"
    SUPERVISOR = "SUPERVISOR"
    TEAM_LEAD = "TEAM_LEAD"
    CLIENT = "CLIENT"
    WORKER = "WORKER"


class AttendanceStatus(str, Enum):
    """Attendance status persisted in the database."""

    PENDING = "PENDING"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    ON_LEAVE = "ON_LEAVE"
    SICK = "SICK"
    VALIDATED = "VALIDATED"


class CheckInChannel(str, Enum):
    """How an attendance record was opened."""

    SELF_SERVICE = "SELF_SERVICE"
    QR_SCAN = "QR_SCAN"
    ADMINISTRATIVE = "ADMINISTRATIVE"


class NotificationType(str, Enum):
    INFO = "INFO"
    VALIDATION = "VALIDATION"


class ReportPeriod(str, Enum):
    """Report window around a reference date."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @classmethod
    def parse(cls, value: str | None) -> "ReportPeriod":
        v = (value or "").strip().lower()
        if not v:
            return cls.DAY
        aliases = {"daily": cls.DAY, "weekly": cls.WEEK, "monthly": cls.MONTH}
        if v in aliases:
            return aliases[v]
        return cls(v)
