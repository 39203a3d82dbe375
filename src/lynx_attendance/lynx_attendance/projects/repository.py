from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def supervisor_ids(self, project_ids: Sequence[int]) -> Sequence[int]:
        """Distinct, non-null supervisors of the given projects."""

        raise NotImplementedError
