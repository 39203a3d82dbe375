from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a site user.

    Plain data object; no database access code here.
    """

    user_id: int
    email: str
    first_name: str
    last_name: str
    password_hash: str
    role: Role
    qr_token: Optional[str] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
