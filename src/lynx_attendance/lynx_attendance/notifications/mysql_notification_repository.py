from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_placeholders
from .model import NewNotification, Notification
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_many(self, notifications: Sequence[NewNotification]) -> int:
        if not notifications:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO notifications(user_id, title, message, type, link, is_read)
                VALUES(%s,%s,%s,%s,%s,0)
                """,
                [(int(n.user_id), n.title, n.message, n.type.value, n.link) for n in notifications],
            )
            return int(cur.rowcount)

    def list_for_user(self, user_id: int, *, limit: int) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT notification_id, user_id, title, message, type, link, is_read, created_at
                FROM notifications
                WHERE user_id=%s
                ORDER BY created_at DESC, notification_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [
                Notification(
                    notification_id=int(r["notification_id"]),
                    user_id=int(r["user_id"]),
                    title=r["title"],
                    message=r["message"],
                    type=NotificationType(r["type"]),
                    link=r.get("link"),
                    is_read=bool(r["is_read"]),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]

    def mark_read(self, user_id: int, *, notification_ids: Optional[Sequence[int]] = None) -> int:
        clauses = ["user_id=%s", "is_read=0"]
        params: list[object] = [int(user_id)]

        if notification_ids is not None:
            ids = [int(i) for i in notification_ids]
            if not ids:
                return 0
            clauses.append(f"notification_id IN ({in_placeholders(ids)})")
            params.extend(ids)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE notifications SET is_read=1 WHERE {' AND '.join(clauses)}", tuple(params))
            return int(cur.rowcount)
