from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders
from .model import Project
from .repository import ProjectRepository


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT project_id, name, supervisor_id FROM projects WHERE project_id=%s",
                (int(project_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Project(project_id=int(r["project_id"]), name=r["name"], supervisor_id=r.get("supervisor_id"))

    def supervisor_ids(self, project_ids: Sequence[int]) -> Sequence[int]:
        ids = [int(p) for p in project_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT DISTINCT supervisor_id
                FROM projects
                WHERE project_id IN ({in_placeholders(ids)}) AND supervisor_id IS NOT NULL
                ORDER BY supervisor_id
                """,
                tuple(ids),
            )
            return [int(r["supervisor_id"]) for r in fetchall(cur)]
