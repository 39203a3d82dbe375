from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import period_window
from ..core.enums import ReportPeriod, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..core.permissions import Operation, require_allowed
from ..projects.repository import ProjectRepository
from ..teams.repository import TeamRepository
from ..users.service import SessionUser

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "work_date",
    "user_id",
    "last_name",
    "first_name",
    "project_name",
    "check_in",
    "check_out",
    "status",
    "validated_by",
    "note",
]


@dataclass(frozen=True)
class ReportData:
    period: ReportPeriod
    start: date
    end: date
    rows: list[dict]


def _sort_key(r: AttendanceReportRow):
    # date newest first, then surname
    return (-r.work_date.toordinal(), r.last_name.lower(), r.first_name.lower(), r.attendance_id)


def format_row(r: AttendanceReportRow) -> dict:
    return {
        "id": r.attendance_id,
        "user_id": r.user_id,
        "first_name": r.first_name,
        "last_name": r.last_name,
        "work_date": r.work_date.strftime("%Y-%m-%d"),
        "check_in": r.check_in_time.strftime("%H:%M") if r.check_in_time else None,
        "check_out": r.check_out_time.strftime("%H:%M") if r.check_out_time else None,
        "status": r.status.value,
        "note": r.note or "",
        "project_id": r.project_id,
        "project_name": r.project_name,
        "validated_by": r.validator_name,
    }


class AttendanceReportService:
    def __init__(self, attendance: AttendanceRepository, teams: TeamRepository, projects: ProjectRepository):
        self._attendance = attendance
        self._teams = teams
        self._projects = projects

    def _scope_user_ids(self, actor: SessionUser, team_id: Optional[int]) -> Optional[Sequence[int]]:
        """Member ids the report is restricted to, or None for everyone."""
        if actor.role == Role.TEAM_LEAD:
            team = self._teams.get_led_by(actor.user_id)
            if not team:
                raise NotFoundError("You do not lead any team")
            if team_id is not None and int(team_id) != team.team_id:
                raise AuthorizationError("You can only view your own team")
            return self._teams.member_ids(team.team_id)

        if team_id is None:
            return None
        team = self._teams.get_by_id(int(team_id))
        if not team:
            raise NotFoundError("Team not found")
        return self._teams.member_ids(team.team_id)

    def build(
        self,
        actor: SessionUser,
        *,
        period: ReportPeriod = ReportPeriod.DAY,
        reference: date,
        project_id: Optional[int] = None,
        team_id: Optional[int] = None,
    ) -> ReportData:
        require_allowed(actor.role, Operation.LIST_REPORT)

        start, end = period_window(period, reference)
        if project_id is not None and not self._projects.get_by_id(int(project_id)):
            raise NotFoundError("Project not found")
        user_ids = self._scope_user_ids(actor, team_id)

        rows = self._attendance.get_report_rows(
            start_date=start,
            end_date=end,
            project_id=project_id,
            user_ids=user_ids,
        )
        out_rows = [format_row(r) for r in sorted(rows, key=_sort_key)]

        logger.info(
            "report period=%s %s..%s project=%s team=%s rows=%s by=%s",
            period.value,
            start,
            end,
            project_id,
            team_id,
            len(out_rows),
            actor.user_id,
        )
        return ReportData(period=period, start=start, end=end, rows=out_rows)

    @staticmethod
    def to_csv(data: ReportData) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)
        # BOM so spreadsheet apps pick up UTF-8 names
        return out.getvalue().encode("utf-8-sig")
