from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_email, require_length, require_min_length
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    name: str
    role: Role


def _optional_text(value, field_name: str = "Value", max_len: int = 100) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if len(value) > max_len:
        raise ValidationError(f"{field_name} cannot exceed {max_len} characters")
    return value or None


class AuthService:
    """Use cases: register, login, own profile."""

    def __init__(self, users: UserRepository, *, clock=now_local):
        self._users = users
        self._clock = clock

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Role = Role.INTERN,
        department: Optional[str] = None,
        now: datetime | None = None,
    ) -> User:
        name = require_length(name, "Name", 2, 50)
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        user = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            department=_optional_text(department, "Department"),
            now=now or self._clock(),
        )
        logger.info("Registered user=%s role=%s", user.user_id, user.role.value)
        return user

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email(str(email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Failed login for user=%s", user.user_id)
            raise AuthenticationError("Invalid credentials")

        return SessionUser(user_id=user.user_id, name=user.name, role=user.role)

    def get_profile(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(
        self,
        user_id: str,
        *,
        name: Optional[str] = None,
        department: Optional[str] = None,
        avatar: Optional[str] = None,
        now: datetime | None = None,
    ) -> User:
        current = self.get_profile(user_id)
        updated = self._users.update_profile(
            user_id,
            name=require_length(name, "Name", 2, 50) if name is not None else current.name,
            department=_optional_text(department, "Department") if department is not None else current.department,
            avatar=_optional_text(avatar, "Avatar", 500) if avatar is not None else current.avatar,
            now=now or self._clock(),
        )
        if not updated:
            raise NotFoundError("User not found")
        return updated


class UserService:
    """Use case: admin views over users."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
