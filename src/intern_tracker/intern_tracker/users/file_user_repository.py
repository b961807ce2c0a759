from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.file_store import JsonFileStore
from .model import User
from .repository import UserRepository

COLLECTION = "users"


class FileUserRepository(UserRepository):
    def __init__(self, store: JsonFileStore):
        self._store = store

    def get_by_id(self, user_id: str) -> Optional[User]:
        doc = self._store.get(COLLECTION, str(user_id))
        return User.from_dict(doc) if doc else None

    def get_by_email(self, email: str) -> Optional[User]:
        doc = self._store.find_one(COLLECTION, email=email.lower())
        return User.from_dict(doc) if doc else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: Optional[str],
        now: datetime,
    ) -> User:
        with self._store.transaction() as data:
            docs = data.setdefault(COLLECTION, {})
            if any(d["email"] == email for d in docs.values()):
                raise ConflictError("User already exists with this email")
            user = User(
                user_id=uuid.uuid4().hex,
                name=name,
                email=email,
                password_hash=password_hash,
                role=role,
                department=department,
                created_at=now,
                updated_at=now,
            )
            docs[user.user_id] = user.to_dict()
            return user

    def update_profile(
        self,
        user_id: str,
        *,
        name: str,
        department: Optional[str],
        avatar: Optional[str],
        now: datetime,
    ) -> Optional[User]:
        with self._store.transaction() as data:
            doc = data.setdefault(COLLECTION, {}).get(str(user_id))
            if doc is None:
                return None
            user = replace(User.from_dict(doc), name=name, department=department, avatar=avatar, updated_at=now)
            data[COLLECTION][user.user_id] = user.to_dict()
            return user

    def list_all(self) -> Sequence[User]:
        users = [User.from_dict(d) for d in self._store.all(COLLECTION)]
        users.sort(key=lambda u: u.created_at)
        return users
