from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Team


class TeamRepository(Protocol):
    def get_by_id(self, team_id: int) -> Optional[Team]:
        raise NotImplementedError

    def get_led_by(self, leader_id: int) -> Optional[Team]:
        """First team whose leader is ``leader_id``."""

        raise NotImplementedError

    def member_ids(self, team_id: int) -> Sequence[int]:
        raise NotImplementedError
