from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import EntryStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.transmission_service import TransmissionService
from .core.constants import NOTIFICATION_INBOX_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .reports.service import AttendanceReportService
from .teams.mysql_team_repository import MySQLTeamRepository
from .teams.repository import TeamRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, BadgeService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    teams_repo: TeamRepository
    projects_repo: ProjectRepository
    attendance_repo: AttendanceRepository
    notifications_repo: NotificationRepository

    auth_service: AuthService
    badge_service: BadgeService
    attendance_service: AttendanceService
    transmission_service: TransmissionService
    report_service: AttendanceReportService
    notification_service: NotificationService

    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    users_repo: UserRepository,
    teams_repo: TeamRepository,
    projects_repo: ProjectRepository,
    attendance_repo: AttendanceRepository,
    notifications_repo: NotificationRepository,
    conn: Optional[DatabaseConnection] = None,
    inbox_limit: int = NOTIFICATION_INBOX_LIMIT,
) -> Container:
    """Wire services on top of any set of repositories (MySQL or in-memory)."""
    return Container(
        users_repo=users_repo,
        teams_repo=teams_repo,
        projects_repo=projects_repo,
        attendance_repo=attendance_repo,
        notifications_repo=notifications_repo,
        auth_service=AuthService(users_repo),
        badge_service=BadgeService(users_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            users_repo,
            teams_repo,
            projects_repo,
            strategy_factory=EntryStrategyFactory(),
        ),
        transmission_service=TransmissionService(attendance_repo, projects_repo, users_repo, notifications_repo),
        report_service=AttendanceReportService(attendance_repo, teams_repo, projects_repo),
        notification_service=NotificationService(notifications_repo, inbox_limit=inbox_limit),
        conn=conn,
    )


def build_container(*, db_config: dict, inbox_limit: int = NOTIFICATION_INBOX_LIMIT) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        teams_repo=MySQLTeamRepository(conn),
        projects_repo=MySQLProjectRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        conn=conn,
        inbox_limit=inbox_limit,
    )
