from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_qr_token(self, qr_token: str) -> Optional[User]:
        raise NotImplementedError

    def list_ids_by_role(self, role: Role) -> Sequence[int]:
        raise NotImplementedError

    def set_qr_token(self, user_id: int, qr_token: str) -> bool:
        raise NotImplementedError
