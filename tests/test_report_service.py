from __future__ import annotations

from datetime import date, datetime

import pytest

from src.lynx_attendance.lynx_attendance.core.enums import AttendanceStatus, ReportPeriod
from src.lynx_attendance.lynx_attendance.core.exceptions import AuthorizationError, NotFoundError
from src.lynx_attendance.lynx_attendance.reports.service import AttendanceReportService
from tests.fakes import (
    ADMIN_ID,
    CLIENT_ID,
    IDLE_LEAD_ID,
    LEAD_ID,
    OUTSIDER_ID,
    PROJECT_A,
    SUPERVISOR_ID,
    TEAM_ID,
    WORKER_1,
    WORKER_2,
)


def _record(attendance_repo, user_id, work_date, status=AttendanceStatus.PRESENT, project_id=None, check_in=None):
    return attendance_repo.add(
        user_id=user_id,
        work_date=work_date,
        check_in_time=check_in,
        check_out_time=None,
        status=status,
        project_id=project_id,
    )


@pytest.fixture
def week(attendance_repo):
    # Mon 9 .. Sun 15 March 2026, plus one record outside the week
    _record(attendance_repo, WORKER_2, date(2026, 3, 9))
    _record(attendance_repo, OUTSIDER_ID, date(2026, 3, 11), project_id=PROJECT_A)
    _record(attendance_repo, WORKER_1, date(2026, 3, 11), check_in=datetime(2026, 3, 11, 7, 55))
    _record(attendance_repo, WORKER_2, date(2026, 3, 11), status=AttendanceStatus.PENDING)
    _record(attendance_repo, WORKER_1, date(2026, 3, 15))
    _record(attendance_repo, WORKER_1, date(2026, 3, 16))


def test_weekly_report_window_and_order(container, as_user, week):
    data = container.report_service.build(as_user(ADMIN_ID), period=ReportPeriod.WEEK, reference=date(2026, 3, 11))

    assert (data.start, data.end) == (date(2026, 3, 9), date(2026, 3, 15))
    assert [(r["work_date"], r["last_name"]) for r in data.rows] == [
        ("2026-03-15", "Roux"),
        ("2026-03-11", "Blanc"),
        ("2026-03-11", "Moreau"),
        ("2026-03-11", "Roux"),
        ("2026-03-09", "Moreau"),
    ]


def test_daily_report_is_default_and_formats_rows(container, as_user, week):
    data = container.report_service.build(as_user(SUPERVISOR_ID), reference=date(2026, 3, 11))

    assert data.period == ReportPeriod.DAY
    roux = next(r for r in data.rows if r["user_id"] == WORKER_1)
    assert roux["check_in"] == "07:55"
    assert roux["check_out"] is None
    assert roux["status"] == "PRESENT"


def test_monthly_report_covers_whole_month(container, as_user, week):
    data = container.report_service.build(as_user(ADMIN_ID), period=ReportPeriod.MONTH, reference=date(2026, 3, 20))

    assert (data.start, data.end) == (date(2026, 3, 1), date(2026, 3, 31))
    assert len(data.rows) == 6


def test_project_filter_is_forwarded(container, attendance_repo, as_user, week):
    data = container.report_service.build(
        as_user(ADMIN_ID), period=ReportPeriod.WEEK, reference=date(2026, 3, 11), project_id=PROJECT_A
    )

    assert attendance_repo.last_report_args["project_id"] == PROJECT_A
    assert [r["user_id"] for r in data.rows] == [OUTSIDER_ID]
    assert data.rows[0]["project_name"] == "Residence Les Tilleuls"


def test_team_filter_resolves_members(container, attendance_repo, as_user, week):
    data = container.report_service.build(
        as_user(ADMIN_ID), period=ReportPeriod.WEEK, reference=date(2026, 3, 11), team_id=TEAM_ID
    )

    assert attendance_repo.last_report_args["user_ids"] == [WORKER_1, WORKER_2]
    assert OUTSIDER_ID not in {r["user_id"] for r in data.rows}


def test_team_lead_report_is_scoped_to_own_team(container, as_user, week):
    data = container.report_service.build(as_user(LEAD_ID), period=ReportPeriod.WEEK, reference=date(2026, 3, 11))

    assert {r["user_id"] for r in data.rows} == {WORKER_1, WORKER_2}


def test_team_lead_cannot_ask_for_another_team(container, as_user):
    with pytest.raises(AuthorizationError):
        container.report_service.build(as_user(LEAD_ID), reference=date(2026, 3, 11), team_id=999)


def test_team_lead_without_team_is_not_found(container, as_user):
    with pytest.raises(NotFoundError):
        container.report_service.build(as_user(IDLE_LEAD_ID), reference=date(2026, 3, 11))


def test_unknown_team_or_project_is_not_found(container, as_user):
    svc = container.report_service
    with pytest.raises(NotFoundError):
        svc.build(as_user(ADMIN_ID), reference=date(2026, 3, 11), team_id=999)
    with pytest.raises(NotFoundError):
        svc.build(as_user(ADMIN_ID), reference=date(2026, 3, 11), project_id=999)


@pytest.mark.parametrize("user_id", [CLIENT_ID, WORKER_1])
def test_report_forbidden_for_other_roles(container, as_user, user_id):
    with pytest.raises(AuthorizationError):
        container.report_service.build(as_user(user_id), reference=date(2026, 3, 11))


def test_csv_export_has_header_and_rows(container, as_user, week):
    data = container.report_service.build(as_user(ADMIN_ID), reference=date(2026, 3, 11))

    text = AttendanceReportService.to_csv(data).decode("utf-8-sig")
    lines = text.strip().splitlines()

    assert lines[0].startswith("work_date,user_id,last_name,first_name")
    assert len(lines) == 1 + len(data.rows)
