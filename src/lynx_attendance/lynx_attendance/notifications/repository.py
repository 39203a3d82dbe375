from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewNotification, Notification


class NotificationRepository(Protocol):
    def create_many(self, notifications: Sequence[NewNotification]) -> int:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int) -> Sequence[Notification]:
        raise NotImplementedError

    def mark_read(self, user_id: int, *, notification_ids: Optional[Sequence[int]] = None) -> int:
        """Mark the caller's notifications read; all unread ones when ids is None."""

        raise NotImplementedError
