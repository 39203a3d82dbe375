from __future__ import annotations

from src.lynx_attendance.lynx_attendance.core.enums import NotificationType
from src.lynx_attendance.lynx_attendance.notifications.model import NewNotification
from src.lynx_attendance.lynx_attendance.notifications.service import NotificationService
from tests.fakes import ADMIN_ID, SUPERVISOR_ID, FakeNotificationRepo


def _seed(repo, user_id, n):
    repo.create_many([NewNotification(user_id=user_id, title=f"t{i}", message="m") for i in range(n)])


def test_inbox_is_newest_first_and_limited():
    repo = FakeNotificationRepo()
    _seed(repo, ADMIN_ID, 35)
    _seed(repo, SUPERVISOR_ID, 2)

    items = NotificationService(repo).inbox(user_id=ADMIN_ID)

    assert len(items) == 30
    assert items[0].title == "t34"
    assert all(n.user_id == ADMIN_ID for n in items)
    assert items[0].type == NotificationType.INFO


def test_mark_read_by_ids_only_touches_own_notifications():
    repo = FakeNotificationRepo()
    _seed(repo, ADMIN_ID, 3)
    _seed(repo, SUPERVISOR_ID, 1)
    supervisor_note = repo.items[-1].notification_id

    svc = NotificationService(repo)
    updated = svc.mark_read(user_id=ADMIN_ID, notification_ids=[1, supervisor_note])

    assert updated == 1
    assert [n.is_read for n in repo.items] == [True, False, False, False]


def test_mark_read_without_ids_marks_all_unread():
    repo = FakeNotificationRepo()
    _seed(repo, ADMIN_ID, 3)
    svc = NotificationService(repo)

    assert svc.mark_read(user_id=ADMIN_ID, notification_ids=[]) == 3
    assert svc.mark_read(user_id=ADMIN_ID) == 0
