from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import NOTIFICATION_INBOX_LIMIT
from .model import Notification
from .repository import NotificationRepository


class NotificationService:
    def __init__(self, notifications: NotificationRepository, *, inbox_limit: int = NOTIFICATION_INBOX_LIMIT):
        self._notifications = notifications
        self._inbox_limit = int(inbox_limit)

    def inbox(self, *, user_id: int) -> Sequence[Notification]:
        return self._notifications.list_for_user(int(user_id), limit=self._inbox_limit)

    def mark_read(self, *, user_id: int, notification_ids: Optional[Sequence[int]] = None) -> int:
        # an empty or missing id list means "mark everything read"
        ids = list(notification_ids) if notification_ids else None
        return self._notifications.mark_read(int(user_id), notification_ids=ids)
