from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus, CheckInChannel, Role
from ..core.exceptions import ConflictError, DuplicateRecordError, NotFoundError, ValidationError
from ..core.permissions import Operation, require_allowed
from ..projects.repository import ProjectRepository
from ..teams.repository import TeamRepository
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import SessionUser
from .factory import EntryStrategyFactory
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanOutcome:
    """Result of a badge scan.

    A repeated scan is not an error: success is False and record is the
    record already stored for today.
    """

    success: bool
    message: str
    worker: User
    record: Optional[AttendanceRecord]


@dataclass(frozen=True)
class UpsertOutcome:
    record: AttendanceRecord
    created: bool


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        teams: TeamRepository,
        projects: ProjectRepository,
        *,
        strategy_factory: EntryStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._teams = teams
        self._projects = projects
        self._factory = strategy_factory or EntryStrategyFactory()

    def _require_project(self, project_id: Optional[int]) -> None:
        if project_id is not None and not self._projects.get_by_id(int(project_id)):
            raise NotFoundError("Project not found")

    def _load(self, attendance_id: int) -> AttendanceRecord:
        rec = self._attendance.get_by_id(attendance_id)
        if not rec:
            raise NotFoundError("Attendance record not found")
        return rec

    def check_in(
        self,
        actor: SessionUser,
        *,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        project_id: Optional[int] = None,
        notes: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Self-service check-in for today; the record awaits validation."""
        require_allowed(actor.role, Operation.SELF_CHECK_IN)
        now = now or now_local()
        today = now.date()

        self._require_project(project_id)

        strategy = self._factory.for_channel(CheckInChannel.SELF_SERVICE)
        decision = strategy.decide(requested_status=None, note=notes, actor_name=actor.full_name)

        try:
            attendance_id = self._attendance.create(
                user_id=actor.user_id,
                work_date=today,
                check_in_time=now,
                status=decision.status,
                note=decision.note,
                latitude=latitude,
                longitude=longitude,
                project_id=project_id,
            )
        except DuplicateRecordError:
            raise ConflictError("You have already checked in today")

        logger.info("check-in user_id=%s date=%s attendance_id=%s", actor.user_id, today, attendance_id)
        return self._load(attendance_id)

    def scan(self, actor: SessionUser, *, qr_token: str, now: datetime | None = None) -> ScanOutcome:
        """Team Lead scans a worker badge: the worker is marked present right away."""
        require_allowed(actor.role, Operation.QR_SCAN)
        qr_token = require_non_empty(qr_token, "qrToken")
        now = now or now_local()
        today = now.date()

        worker = self._users.get_by_qr_token(qr_token)
        if not worker:
            raise NotFoundError("Worker not found")

        strategy = self._factory.for_channel(CheckInChannel.QR_SCAN)
        decision = strategy.decide(requested_status=None, note=None, actor_name=actor.full_name)

        try:
            attendance_id = self._attendance.create(
                user_id=worker.user_id,
                work_date=today,
                check_in_time=now,
                status=decision.status,
                note=decision.note,
            )
        except DuplicateRecordError:
            logger.info("scan duplicate worker_id=%s date=%s by=%s", worker.user_id, today, actor.user_id)
            return ScanOutcome(
                success=False,
                message="Attendance already recorded today",
                worker=worker,
                record=self._attendance.get_for_user_and_date(worker.user_id, today),
            )

        logger.info("scan worker_id=%s date=%s by=%s", worker.user_id, today, actor.user_id)
        return ScanOutcome(
            success=True,
            message=f"Presence confirmed for {worker.full_name}",
            worker=worker,
            record=self._load(attendance_id),
        )

    def upsert(
        self,
        actor: SessionUser,
        *,
        user_id: int,
        work_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[datetime] = None,
        check_out_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> UpsertOutcome:
        """Administrative write: one record per (user, day), overwritten in place if present."""
        require_allowed(actor.role, Operation.ADMIN_WRITE)

        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")
        if check_in_time and check_out_time and check_out_time < check_in_time:
            raise ValidationError("Check-out cannot be earlier than check-in")

        strategy = self._factory.for_channel(CheckInChannel.ADMINISTRATIVE)
        decision = strategy.decide(requested_status=status, note=notes, actor_name=actor.full_name)

        attendance_id, created = self._attendance.upsert_for_day(
            user_id=int(user_id),
            work_date=work_date,
            status=decision.status,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            note=decision.note,
        )

        logger.info(
            "attendance %s user_id=%s date=%s status=%s by=%s",
            "created" if created else "updated",
            user_id,
            work_date,
            decision.status.value,
            actor.user_id,
        )
        return UpsertOutcome(record=self._load(attendance_id), created=created)

    def validate(self, actor: SessionUser, *, attendance_ids: Sequence[int], now: datetime | None = None) -> int:
        """PENDING -> VALIDATED for the given ids. Other records are left untouched."""
        require_allowed(actor.role, Operation.VALIDATE_BATCH)
        now = now or now_local()

        count = self._attendance.validate_pending(
            attendance_ids=[int(i) for i in attendance_ids],
            validator_id=actor.user_id,
            validated_at=now,
        )
        logger.info("validated %s/%s records by=%s", count, len(attendance_ids), actor.user_id)
        return count

    def get_today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(int(user_id), today)

    def list_team_day(self, actor: SessionUser, *, work_date: date) -> Sequence[AttendanceReportRow]:
        """A day's records; Team Leads only see the team they lead."""
        require_allowed(actor.role, Operation.LIST_REPORT)

        user_ids: Optional[Sequence[int]] = None
        if actor.role == Role.TEAM_LEAD:
            team = self._teams.get_led_by(actor.user_id)
            if not team:
                raise NotFoundError("You do not lead any team")
            user_ids = self._teams.member_ids(team.team_id)

        return self._attendance.list_for_day(work_date=work_date, user_ids=user_ids)
