from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access code here.
    """

    user_id: str
    name: str
    email: str
    password_hash: str
    role: Role
    created_at: datetime
    updated_at: datetime
    department: Optional[str] = None
    avatar: Optional[str] = None
    is_active: bool = True

    def to_public_dict(self) -> dict:
        """JSON view without the password hash."""
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "department": self.department,
            "avatar": self.avatar,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    def to_dict(self) -> dict:
        data = self.to_public_dict()
        data["password"] = self.password_hash
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            user_id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            password_hash=data["password"],
            role=Role(data["role"]),
            department=data.get("department"),
            avatar=data.get("avatar"),
            is_active=bool(data.get("isActive", True)),
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
        )
