from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ...core.exceptions import ValidationError
from ..status import require_administrative
from .base import EntryStrategy, StatusDecision


class AdministrativeStrategy(EntryStrategy):
    """Admin or Team Lead classifies the day directly."""

    def decide(
        self,
        *,
        requested_status: Optional[AttendanceStatus],
        note: Optional[str],
        actor_name: str,
    ) -> StatusDecision:
        if requested_status is None:
            raise ValidationError("status is required")
        return StatusDecision(status=require_administrative(requested_status), note=note)
