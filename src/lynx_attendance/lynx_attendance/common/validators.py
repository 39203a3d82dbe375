from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import AttendanceStatus, ReportPeriod
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    v = str(value).strip()
    return v or None


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be an integer")


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "" or value == "all":
        return None
    return require_int(value, field_name)


def optional_float(value: Any, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    return number


def optional_coordinate(value: Any, field_name: str, limit: float) -> Optional[float]:
    """Decimal degrees within [-limit, limit]: 90 for latitude, 180 for longitude."""
    number = optional_float(value, field_name)
    if number is not None and not -limit <= number <= limit:
        raise ValidationError(f"{field_name} must be between -{limit:g} and {limit:g}")
    return number


def require_id_list(value: Any, field_name: str, *, allow_empty: bool = True) -> list[int]:
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be a list of ids")
    ids = [require_int(v, field_name) for v in value]
    if not ids and not allow_empty:
        raise ValidationError(f"{field_name} must not be empty")
    # keep first occurrence order, drop repeats
    return list(dict.fromkeys(ids))


def require_date(value: Any, field_name: str) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    v = require_non_empty(value, field_name)
    try:
        return parse_iso_date(v[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def optional_datetime(value: Any, field_name: str) -> Optional[datetime]:
    """ISO timestamp as naive local time; offsets are converted, not dropped."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = parse_iso_datetime(str(value))
        except ValueError:
            raise ValidationError(f"{field_name} must be an ISO timestamp")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def require_status(value: Any) -> AttendanceStatus:
    v = require_non_empty(value, "status")
    try:
        return AttendanceStatus(v.upper())
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {v}")


def require_period(value: Any) -> ReportPeriod:
    try:
        return ReportPeriod.parse(value)
    except ValueError:
        raise ValidationError("period must be one of day, week, month")
