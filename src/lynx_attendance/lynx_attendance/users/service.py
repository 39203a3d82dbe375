from __future__ import annotations

import io
import logging
import secrets
from dataclasses import dataclass
from typing import BinaryIO

import qrcode
from PIL import Image, UnidentifiedImageError
from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.constants import QR_TOKEN_BYTES
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "email").lower()
        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME' in seeded rows
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("login user_id=%s role=%s", user.user_id, user.role.value)
        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)


class BadgeService:
    """Worker QR badges: the opaque token a Team Lead scans on site."""

    def __init__(self, users: UserRepository):
        self._users = users

    def ensure_qr_token(self, user_id: int) -> str:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if user.qr_token:
            return user.qr_token

        token = secrets.token_urlsafe(QR_TOKEN_BYTES)
        if not self._users.set_qr_token(user.user_id, token):
            # another request issued one first
            fresh = self._users.get_by_id(user.user_id)
            if not fresh or not fresh.qr_token:
                raise NotFoundError("User not found")
            return fresh.qr_token

        logger.info("issued qr token user_id=%s", user.user_id)
        return token

    @staticmethod
    def render_png(token: str) -> bytes:
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=2,
        )
        qr.add_data(token)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    @staticmethod
    def read_token(image_stream: BinaryIO) -> str:
        """Decode the first QR code found in an uploaded badge photo."""
        try:
            img = Image.open(image_stream).convert("RGB")
        except (UnidentifiedImageError, OSError):
            raise ValidationError("Uploaded file is not an image")

        # pyzbar loads the zbar shared library on import
        from pyzbar.pyzbar import decode as pyzbar_decode

        decoded = pyzbar_decode(img)
        if not decoded:
            raise ValidationError("No QR code found in image")
        return decoded[0].data.decode("utf-8").strip()
