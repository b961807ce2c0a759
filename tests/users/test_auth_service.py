from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.intern_tracker.intern_tracker.core.enums import Role
from src.intern_tracker.intern_tracker.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.intern_tracker.intern_tracker.users.model import User
from src.intern_tracker.intern_tracker.users.service import AuthService, UserService


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[str, User] = {}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, role, department, now) -> User:
        if self.get_by_email(email):
            raise ConflictError("User already exists with this email")
        user = User(
            user_id=str(len(self.by_id) + 1),
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            department=department,
            created_at=now,
            updated_at=now,
        )
        self.by_id[user.user_id] = user
        return user

    def update_profile(self, user_id, *, name, department, avatar, now) -> Optional[User]:
        user = self.by_id.get(user_id)
        if not user:
            return None
        user = replace(user, name=name, department=department, avatar=avatar, updated_at=now)
        self.by_id[user_id] = user
        return user

    def list_all(self):
        return list(self.by_id.values())


@pytest.fixture
def users():
    return InMemoryUsers()


@pytest.fixture
def auth(users, fixed_now):
    return AuthService(users, clock=lambda: fixed_now)


def test_register_hashes_password_and_lowercases_email(auth):
    user = auth.register(name="Ada", email="Ada@Example.com", password="secret1")

    assert user.email == "ada@example.com"
    assert user.role == Role.INTERN
    assert user.password_hash != "secret1"
    assert "password" not in user.to_public_dict()


def test_register_duplicate_email_conflicts(auth):
    auth.register(name="Ada", email="ada@example.com", password="secret1")

    with pytest.raises(ConflictError):
        auth.register(name="Ada Two", email="ADA@example.com", password="secret2")


@pytest.mark.parametrize(
    "name,email,password",
    [
        ("A", "ada@example.com", "secret1"),
        ("Ada", "not-an-email", "secret1"),
        ("Ada", "ada@example.com", "short"),
    ],
)
def test_register_validates_input(auth, name, email, password):
    with pytest.raises(ValidationError):
        auth.register(name=name, email=email, password=password)


def test_authenticate_ok(auth):
    user = auth.register(name="Ada", email="ada@example.com", password="secret1")

    session_user = auth.authenticate(" ADA@example.com ", "secret1")

    assert session_user.user_id == user.user_id
    assert session_user.role == Role.INTERN


def test_auth_wrong_password_raises(auth):
    auth.register(name="Ada", email="ada@example.com", password="secret1")

    with pytest.raises(AuthenticationError):
        auth.authenticate("ada@example.com", "wrong")
    with pytest.raises(AuthenticationError):
        auth.authenticate("nobody@example.com", "secret1")


def test_auth_inactive_or_corrupt_hash_raises(users, auth, fixed_now):
    users.by_id["9"] = User(
        user_id="9",
        name="Old",
        email="old@example.com",
        password_hash=generate_password_hash("secret1"),
        role=Role.INTERN,
        created_at=fixed_now,
        updated_at=fixed_now,
        is_active=False,
    )
    users.by_id["10"] = replace(users.by_id["9"], user_id="10", email="bad@example.com", password_hash="CHANGE_ME", is_active=True)

    with pytest.raises(AuthenticationError):
        auth.authenticate("old@example.com", "secret1")
    with pytest.raises(AuthenticationError):
        auth.authenticate("bad@example.com", "secret1")


def test_update_profile_keeps_unsent_fields(auth):
    user = auth.register(name="Ada", email="ada@example.com", password="secret1", department="R&D")

    updated = auth.update_profile(user.user_id, avatar="https://example.com/a.png")

    assert updated.name == "Ada"
    assert updated.department == "R&D"
    assert updated.avatar == "https://example.com/a.png"


def test_profile_missing_user_not_found(auth, users):
    with pytest.raises(NotFoundError):
        auth.get_profile("404")
    with pytest.raises(NotFoundError):
        UserService(users).get_user("404")
