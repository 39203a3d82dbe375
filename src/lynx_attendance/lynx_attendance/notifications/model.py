from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import NotificationType


@dataclass(frozen=True)
class NewNotification:
    user_id: int
    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    link: Optional[str] = None


@dataclass(frozen=True)
class Notification:
    """Domain entity: a message owned by its recipient."""

    notification_id: int
    user_id: int
    title: str
    message: str
    type: NotificationType
    link: Optional[str]
    is_read: bool
    created_at: datetime
