from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Project:
    project_id: int
    name: str
    supervisor_id: Optional[int] = None
