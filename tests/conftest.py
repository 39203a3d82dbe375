from __future__ import annotations

from datetime import date, datetime

import pytest

from src.lynx_attendance.lynx_attendance.container import assemble
from src.lynx_attendance.lynx_attendance.projects.model import Project
from src.lynx_attendance.lynx_attendance.teams.model import Team
from src.lynx_attendance.lynx_attendance.users.service import SessionUser
from tests.fakes import (
    LEAD_ID,
    PROJECT_A,
    PROJECT_B,
    PROJECT_UNSUPERVISED,
    SUPERVISOR_ID,
    TEAM_ID,
    WORKER_1,
    WORKER_2,
    FakeAttendanceRepo,
    FakeNotificationRepo,
    FakeProjectRepo,
    FakeTeamRepo,
    FakeUserRepo,
    make_users,
)


@pytest.fixture
def fixed_now():
    # a Wednesday
    return datetime(2026, 3, 11, 8, 15, 0)


@pytest.fixture
def today(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture
def users_repo():
    return FakeUserRepo(make_users())


@pytest.fixture
def teams_repo():
    return FakeTeamRepo([Team(team_id=TEAM_ID, name="Equipe Gros Oeuvre", leader_id=LEAD_ID)], {TEAM_ID: [WORKER_1, WORKER_2]})


@pytest.fixture
def projects_repo():
    return FakeProjectRepo(
        [
            Project(project_id=PROJECT_A, name="Residence Les Tilleuls", supervisor_id=SUPERVISOR_ID),
            Project(project_id=PROJECT_B, name="Ecole Jules Ferry", supervisor_id=SUPERVISOR_ID),
            Project(project_id=PROJECT_UNSUPERVISED, name="Depot", supervisor_id=None),
        ]
    )


@pytest.fixture
def attendance_repo(users_repo, projects_repo):
    return FakeAttendanceRepo(users_repo, projects_repo)


@pytest.fixture
def notifications_repo():
    return FakeNotificationRepo()


@pytest.fixture
def container(users_repo, teams_repo, projects_repo, attendance_repo, notifications_repo):
    return assemble(
        users_repo=users_repo,
        teams_repo=teams_repo,
        projects_repo=projects_repo,
        attendance_repo=attendance_repo,
        notifications_repo=notifications_repo,
    )


@pytest.fixture
def as_user(users_repo):
    def _as(user_id: int) -> SessionUser:
        u = users_repo.get_by_id(user_id)
        return SessionUser(user_id=u.user_id, full_name=u.full_name, role=u.role)

    return _as
