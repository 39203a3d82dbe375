from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import EntryStrategy, StatusDecision


class SelfServiceStrategy(EntryStrategy):
    """Worker check-in: always awaits Team Lead validation."""

    def decide(
        self,
        *,
        requested_status: Optional[AttendanceStatus],
        note: Optional[str],
        actor_name: str,
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PENDING, note=note)
