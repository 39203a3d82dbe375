from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Team
from .repository import TeamRepository


class MySQLTeamRepository(TeamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, team_id: int) -> Optional[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT team_id, name, leader_id FROM teams WHERE team_id=%s", (int(team_id),))
            r = fetchone(cur)
            if not r:
                return None
            return Team(team_id=int(r["team_id"]), name=r["name"], leader_id=r.get("leader_id"))

    def get_led_by(self, leader_id: int) -> Optional[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT team_id, name, leader_id FROM teams WHERE leader_id=%s ORDER BY team_id LIMIT 1",
                (int(leader_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Team(team_id=int(r["team_id"]), name=r["name"], leader_id=r.get("leader_id"))

    def member_ids(self, team_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM team_members WHERE team_id=%s ORDER BY user_id", (int(team_id),))
            return [int(r["user_id"]) for r in fetchall(cur)]
