"""Per-operation role policy.

Each operation maps to the set of roles allowed to call it. ``None`` means
any authenticated user.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from .enums import Role
from .exceptions import AuthorizationError


class Operation(str, Enum):
    SELF_CHECK_IN = "self_check_in"
    QR_SCAN = "qr_scan"
    LIST_REPORT = "list_report"
    ADMIN_WRITE = "admin_write"
    VALIDATE_BATCH = "validate_batch"
    TRANSMIT = "transmit"


POLICY: dict[Operation, Optional[frozenset[Role]]] = {
    Operation.SELF_CHECK_IN: None,
    Operation.QR_SCAN: frozenset({Role.TEAM_LEAD}),
    Operation.LIST_REPORT: frozenset({Role.ADMIN, Role.SUPERVISOR, Role.TEAM_LEAD}),
    Operation.ADMIN_WRITE: frozenset({Role.ADMIN, Role.TEAM_LEAD}),
    Operation.VALIDATE_BATCH: frozenset({Role.TEAM_LEAD}),
    Operation.TRANSMIT: frozenset({Role.TEAM_LEAD}),
}


def is_allowed(role: Role, operation: Operation) -> bool:
    allowed = POLICY[operation]
    return allowed is None or role in allowed


def require_allowed(role: Role, operation: Operation) -> None:
    if not is_allowed(role, operation):
        raise AuthorizationError("You are not allowed to perform this action")
