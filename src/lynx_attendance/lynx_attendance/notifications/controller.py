from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_user, json_body, login_required
from ..common.validators import require_id_list
from ..container import Container
from .model import Notification


def _notification_json(n: Notification) -> dict:
    return {
        "id": n.notification_id,
        "title": n.title,
        "message": n.message,
        "type": n.type.value,
        "link": n.link,
        "isRead": n.is_read,
        "createdAt": n.created_at.isoformat() if n.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="api_notifications")
    @login_required
    def inbox():
        items = container.notification_service.inbox(user_id=current_user().user_id)
        return jsonify([_notification_json(n) for n in items])

    @app.route("/api/notifications", methods=["PUT"], endpoint="api_notifications_mark_read")
    @login_required
    def mark_read():
        data = json_body()
        ids = require_id_list(data["ids"], "ids") if data.get("ids") is not None else None
        updated = container.notification_service.mark_read(user_id=current_user().user_id, notification_ids=ids)
        return jsonify({"success": True, "updated": updated})
