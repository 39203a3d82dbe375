from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.lynx_attendance.lynx_attendance.core.enums import AttendanceStatus
from src.lynx_attendance.lynx_attendance.core.exceptions import (
    AuthorizationError,
    ConflictError,
    IllegalTransitionError,
    NotFoundError,
    ValidationError,
)
from tests.fakes import (
    ADMIN_ID,
    CLIENT_ID,
    IDLE_LEAD_ID,
    LEAD_ID,
    OUTSIDER_ID,
    PROJECT_A,
    SUPERVISOR_ID,
    WORKER_1,
    WORKER_2,
)


def test_check_in_creates_pending_record_for_today(container, attendance_repo, as_user, fixed_now, today):
    rec = container.attendance_service.check_in(
        as_user(WORKER_1),
        latitude=48.85,
        longitude=2.35,
        project_id=PROJECT_A,
        notes="north gate",
        now=fixed_now,
    )

    assert rec.status == AttendanceStatus.PENDING
    assert rec.work_date == today
    assert rec.check_in_time == fixed_now
    assert rec.project_id == PROJECT_A
    assert rec.note == "north gate"
    assert (rec.latitude, rec.longitude) == (48.85, 2.35)
    assert len(attendance_repo.records) == 1


def test_second_check_in_same_day_conflicts(container, attendance_repo, as_user, fixed_now):
    svc = container.attendance_service
    svc.check_in(as_user(WORKER_1), now=fixed_now)

    with pytest.raises(ConflictError):
        svc.check_in(as_user(WORKER_1), now=fixed_now + timedelta(hours=2))

    assert len(attendance_repo.records) == 1


def test_check_in_next_day_is_a_new_record(container, attendance_repo, as_user, fixed_now):
    svc = container.attendance_service
    svc.check_in(as_user(WORKER_1), now=fixed_now)
    svc.check_in(as_user(WORKER_1), now=fixed_now + timedelta(days=1))

    assert len(attendance_repo.records) == 2


def test_any_role_may_self_check_in(container, as_user, fixed_now):
    rec = container.attendance_service.check_in(as_user(CLIENT_ID), now=fixed_now)
    assert rec.status == AttendanceStatus.PENDING


def test_check_in_unknown_project_is_not_found(container, attendance_repo, as_user, fixed_now):
    with pytest.raises(NotFoundError):
        container.attendance_service.check_in(as_user(WORKER_1), project_id=999, now=fixed_now)
    assert attendance_repo.records == {}


def test_scan_marks_worker_present_with_scanner_note(container, as_user, fixed_now, today):
    outcome = container.attendance_service.scan(as_user(LEAD_ID), qr_token="badge-emile", now=fixed_now)

    assert outcome.success is True
    assert outcome.worker.user_id == WORKER_1
    assert outcome.record.status == AttendanceStatus.PRESENT
    assert outcome.record.work_date == today
    assert outcome.record.note == "QR check-in by Chloe Bernard"


def test_repeated_scan_is_soft_and_writes_nothing(container, attendance_repo, as_user, fixed_now):
    svc = container.attendance_service
    svc.check_in(as_user(WORKER_1), now=fixed_now)

    outcome = svc.scan(as_user(LEAD_ID), qr_token="badge-emile", now=fixed_now + timedelta(minutes=5))

    assert outcome.success is False
    assert outcome.worker.full_name == "Emile Roux"
    assert outcome.record.status == AttendanceStatus.PENDING
    assert len(attendance_repo.records) == 1


def test_scan_unknown_token_is_not_found(container, as_user, fixed_now):
    with pytest.raises(NotFoundError):
        container.attendance_service.scan(as_user(LEAD_ID), qr_token="nope", now=fixed_now)


@pytest.mark.parametrize("user_id", [ADMIN_ID, SUPERVISOR_ID, WORKER_2])
def test_scan_is_team_lead_only(container, as_user, fixed_now, user_id):
    with pytest.raises(AuthorizationError):
        container.attendance_service.scan(as_user(user_id), qr_token="badge-emile", now=fixed_now)


def test_upsert_creates_then_updates_in_place(container, attendance_repo, as_user, today):
    svc = container.attendance_service

    first = svc.upsert(as_user(ADMIN_ID), user_id=WORKER_2, work_date=today, status=AttendanceStatus.ABSENT)
    second = svc.upsert(
        as_user(LEAD_ID),
        user_id=WORKER_2,
        work_date=today,
        status=AttendanceStatus.LATE,
        check_in_time=datetime(2026, 3, 11, 9, 40),
        notes="traffic",
    )

    assert first.created is True
    assert second.created is False
    assert second.record.attendance_id == first.record.attendance_id
    assert second.record.status == AttendanceStatus.LATE
    assert second.record.note == "traffic"
    assert len(attendance_repo.records) == 1


def test_upsert_overwrites_a_self_check_in(container, as_user, fixed_now, today):
    svc = container.attendance_service
    svc.check_in(as_user(WORKER_1), now=fixed_now)

    out = svc.upsert(as_user(ADMIN_ID), user_id=WORKER_1, work_date=today, status=AttendanceStatus.SICK)

    assert out.created is False
    assert out.record.status == AttendanceStatus.SICK


@pytest.mark.parametrize("status", [AttendanceStatus.PENDING, AttendanceStatus.VALIDATED])
def test_upsert_rejects_workflow_statuses(container, attendance_repo, as_user, today, status):
    with pytest.raises(IllegalTransitionError):
        container.attendance_service.upsert(as_user(ADMIN_ID), user_id=WORKER_1, work_date=today, status=status)
    assert attendance_repo.records == {}


@pytest.mark.parametrize("user_id", [SUPERVISOR_ID, CLIENT_ID, WORKER_1])
def test_upsert_requires_admin_or_team_lead(container, as_user, today, user_id):
    with pytest.raises(AuthorizationError):
        container.attendance_service.upsert(
            as_user(user_id), user_id=WORKER_1, work_date=today, status=AttendanceStatus.PRESENT
        )


def test_upsert_unknown_user_is_not_found(container, as_user, today):
    with pytest.raises(NotFoundError):
        container.attendance_service.upsert(as_user(ADMIN_ID), user_id=404, work_date=today, status=AttendanceStatus.PRESENT)


def test_upsert_rejects_check_out_before_check_in(container, as_user, today):
    with pytest.raises(ValidationError):
        container.attendance_service.upsert(
            as_user(ADMIN_ID),
            user_id=WORKER_1,
            work_date=today,
            status=AttendanceStatus.PRESENT,
            check_in_time=datetime(2026, 3, 11, 17, 0),
            check_out_time=datetime(2026, 3, 11, 8, 0),
        )


def test_validate_only_moves_pending_records(container, attendance_repo, as_user, fixed_now, today):
    svc = container.attendance_service
    pending = svc.check_in(as_user(WORKER_1), now=fixed_now)
    present = svc.upsert(as_user(ADMIN_ID), user_id=WORKER_2, work_date=today, status=AttendanceStatus.PRESENT).record

    count = svc.validate(
        as_user(LEAD_ID),
        attendance_ids=[pending.attendance_id, present.attendance_id, 9999],
        now=fixed_now,
    )

    assert count == 1
    validated = attendance_repo.get_by_id(pending.attendance_id)
    assert validated.status == AttendanceStatus.VALIDATED
    assert validated.validated_by == LEAD_ID
    assert attendance_repo.get_by_id(present.attendance_id).status == AttendanceStatus.PRESENT


def test_validate_twice_changes_nothing_the_second_time(container, as_user, fixed_now):
    svc = container.attendance_service
    rec = svc.check_in(as_user(WORKER_1), now=fixed_now)

    assert svc.validate(as_user(LEAD_ID), attendance_ids=[rec.attendance_id], now=fixed_now) == 1
    assert svc.validate(as_user(LEAD_ID), attendance_ids=[rec.attendance_id], now=fixed_now) == 0


def test_validate_empty_batch_is_zero(container, as_user, fixed_now):
    assert container.attendance_service.validate(as_user(LEAD_ID), attendance_ids=[], now=fixed_now) == 0


def test_validate_is_team_lead_only(container, attendance_repo, as_user, fixed_now):
    rec = container.attendance_service.check_in(as_user(WORKER_1), now=fixed_now)

    with pytest.raises(AuthorizationError):
        container.attendance_service.validate(as_user(ADMIN_ID), attendance_ids=[rec.attendance_id], now=fixed_now)

    assert attendance_repo.get_by_id(rec.attendance_id) == rec


def test_today_record_is_none_before_check_in(container, as_user, fixed_now, today):
    svc = container.attendance_service
    assert svc.get_today_record(WORKER_1, today) is None

    svc.check_in(as_user(WORKER_1), now=fixed_now)
    assert svc.get_today_record(WORKER_1, today).status == AttendanceStatus.PENDING


def test_team_day_for_lead_is_scoped_and_ordered_by_check_in(container, as_user, fixed_now, today):
    svc = container.attendance_service
    svc.check_in(as_user(WORKER_2), now=fixed_now + timedelta(minutes=30))
    svc.check_in(as_user(OUTSIDER_ID), now=fixed_now)
    svc.check_in(as_user(WORKER_1), now=fixed_now + timedelta(minutes=10))

    rows = svc.list_team_day(as_user(LEAD_ID), work_date=today)

    assert [r.user_id for r in rows] == [WORKER_1, WORKER_2]


def test_team_day_for_admin_sees_everyone(container, as_user, fixed_now, today):
    svc = container.attendance_service
    svc.check_in(as_user(WORKER_1), now=fixed_now)
    svc.check_in(as_user(OUTSIDER_ID), now=fixed_now)

    rows = svc.list_team_day(as_user(ADMIN_ID), work_date=today)

    assert {r.user_id for r in rows} == {WORKER_1, OUTSIDER_ID}


def test_team_day_for_lead_without_team_is_not_found(container, as_user, today):
    with pytest.raises(NotFoundError):
        container.attendance_service.list_team_day(as_user(IDLE_LEAD_ID), work_date=today)


def test_team_day_is_forbidden_for_workers(container, as_user, today):
    with pytest.raises(AuthorizationError):
        container.attendance_service.list_team_day(as_user(WORKER_1), work_date=today)


def test_admin_overwrite_of_validated_record_drops_validator(container, attendance_repo, as_user, fixed_now, today):
    svc = container.attendance_service
    rec = svc.check_in(as_user(WORKER_1), now=fixed_now)
    svc.validate(as_user(LEAD_ID), attendance_ids=[rec.attendance_id], now=fixed_now)

    outcome = svc.upsert(as_user(ADMIN_ID), user_id=WORKER_1, work_date=today, status=AttendanceStatus.ABSENT)

    assert outcome.created is False
    assert outcome.record.status == AttendanceStatus.ABSENT
    assert outcome.record.validated_by is None
