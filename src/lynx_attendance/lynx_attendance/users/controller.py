from __future__ import annotations

import io

from flask import Flask, jsonify, send_file, session

from ..common.http import current_user, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return jsonify({"id": s_user.user_id, "name": s_user.full_name, "role": s_user.role.value})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    @login_required
    def me():
        user = current_user()
        return jsonify({"id": user.user_id, "name": user.full_name, "role": user.role.value})

    @app.route("/api/me/qr", methods=["GET"], endpoint="api_me_qr")
    @login_required
    def my_qr_badge():
        """PNG badge holding the caller's personal QR token."""
        token = container.badge_service.ensure_qr_token(current_user().user_id)
        png = container.badge_service.render_png(token)
        return send_file(io.BytesIO(png), mimetype="image/png")
