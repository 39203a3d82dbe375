from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ..core.constants import TRANSMIT_LINK, TRANSMIT_TITLE
from ..core.enums import NotificationType, Role
from ..core.exceptions import ValidationError
from ..core.permissions import Operation, require_allowed
from ..notifications.model import NewNotification
from ..notifications.repository import NotificationRepository
from ..projects.repository import ProjectRepository
from ..users.repository import UserRepository
from ..users.service import SessionUser
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransmitResult:
    recipient_ids: list[int]
    records_count: int

    @property
    def recipients_count(self) -> int:
        return len(self.recipient_ids)


class TransmissionService:
    """Tell supervisors and admins that a day's attendance batch is ready.

    Recipients are every Admin plus the supervisors of the projects the
    records belong to, each notified once. Attendance records are not modified.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        projects: ProjectRepository,
        users: UserRepository,
        notifications: NotificationRepository,
    ):
        self._attendance = attendance
        self._projects = projects
        self._users = users
        self._notifications = notifications

    def recipients_for(self, attendance_ids: Sequence[int]) -> tuple[list[int], int]:
        records = self._attendance.list_by_ids(attendance_ids)
        project_ids = sorted({r.project_id for r in records if r.project_id is not None})

        supervisor_ids = self._projects.supervisor_ids(project_ids) if project_ids else []
        admin_ids = self._users.list_ids_by_role(Role.ADMIN)

        recipients = list(dict.fromkeys([*supervisor_ids, *admin_ids]))
        return recipients, len(records)

    def transmit(self, actor: SessionUser, *, work_date: date, attendance_ids: Sequence[int]) -> TransmitResult:
        require_allowed(actor.role, Operation.TRANSMIT)
        if not attendance_ids:
            raise ValidationError("No attendance records to transmit")

        recipients, records_count = self.recipients_for(attendance_ids)

        message = (
            f"{actor.full_name} transmitted attendance for {work_date.strftime('%d/%m/%Y')}. "
            f"{records_count} records."
        )
        link = TRANSMIT_LINK.format(date=work_date.isoformat())
        self._notifications.create_many(
            [
                NewNotification(
                    user_id=user_id,
                    title=TRANSMIT_TITLE,
                    message=message,
                    type=NotificationType.VALIDATION,
                    link=link,
                )
                for user_id in recipients
            ]
        )

        logger.info(
            "transmit date=%s records=%s recipients=%s by=%s",
            work_date,
            records_count,
            len(recipients),
            actor.user_id,
        )
        return TransmitResult(recipient_ids=recipients, records_count=records_count)
