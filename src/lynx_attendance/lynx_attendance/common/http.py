"""JSON plumbing shared by the controllers.

Every API error leaves as ``{"error": "<message>"}`` with the matching status.
"""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import DomainError
from ..core.permissions import Operation, is_allowed
from ..users.service import SessionUser

logger = logging.getLogger(__name__)


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def current_user() -> Optional[SessionUser]:
    if "user_id" not in session:
        return None
    try:
        role = Role(session.get("role"))
    except ValueError:
        return None
    return SessionUser(user_id=int(session["user_id"]), full_name=session.get("name") or "", role=role)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return error_response("Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def requires(operation: Operation):
    """Reject the request before the view runs unless the session role may perform ``operation``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                return error_response("Authentication required", 401)
            if not is_allowed(user.role, operation):
                return error_response("You are not allowed to perform this action", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error_response(str(e), e.http_status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception(
            "unhandled error endpoint=%s method=%s path=%s user_id=%s",
            request.endpoint,
            request.method,
            request.path,
            session.get("user_id"),
        )
        return error_response("Internal server error", 500)
