from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Team:
    team_id: int
    name: str
    leader_id: Optional[int] = None
