from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, name, email, password_hash, role, department, avatar, is_active, created_at, updated_at"


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=str(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        department=row.get("department"),
        avatar=row.get("avatar"),
        is_active=bool(row.get("is_active", True)),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        if not str(user_id).isdigit():
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email.lower(),))
            row = fetchone(cur)
            return _to_user(row) if row else None

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(name, email, password_hash, role, department, is_active, created_at, updated_at)
                    VALUES(%s,%s,%s,%s,%s,1,%s,%s)
                    """,
                    (name, email, password_hash, role.value, department, now, now),
                )
                user_id = int(cur.lastrowid)
        except mysql.connector.errors.IntegrityError as exc:
            if exc.errno == 1062:
                raise ConflictError("User already exists with this email") from exc
            raise

        return User(
            user_id=str(user_id),
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            department=department,
            created_at=now,
            updated_at=now,
        )

    def update_profile(
        self,
        user_id: str,
        *,
        name: str,
        department: Optional[str],
        avatar: Optional[str],
        now: datetime,
    ) -> Optional[User]:
        if not str(user_id).isdigit():
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET name=%s, department=%s, avatar=%s, updated_at=%s
                WHERE user_id=%s
                """,
                (name, department, avatar, now, int(user_id)),
            )
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY created_at ASC")
            return [_to_user(r) for r in fetchall(cur)]
