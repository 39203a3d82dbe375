from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class EntryStrategy(ABC):
    """Strategy Pattern: decide the status a new or rewritten record gets."""

    @abstractmethod
    def decide(
        self,
        *,
        requested_status: Optional[AttendanceStatus],
        note: Optional[str],
        actor_name: str,
    ) -> StatusDecision:
        raise NotImplementedError
