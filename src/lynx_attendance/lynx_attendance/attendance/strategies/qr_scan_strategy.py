from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import EntryStrategy, StatusDecision


class QrScanStrategy(EntryStrategy):
    """Team Lead scanned the worker badge on site: present, no review needed."""

    def decide(
        self,
        *,
        requested_status: Optional[AttendanceStatus],
        note: Optional[str],
        actor_name: str,
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT, note=f"QR check-in by {actor_name}")
