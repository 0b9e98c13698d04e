from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a staff account.

    ``password_hash`` may be in any of the formats the password verifier knows.
    """

    user_id: str
    email: str
    name: str
    password_hash: str
    is_super_user: bool = False


@dataclass(frozen=True)
class DepartmentMembership:
    dept_id: int
    dept_name: str
    admin_ids: frozenset[str]
    member_ids: frozenset[str]

    def includes(self, user_id: str) -> bool:
        return user_id in self.admin_ids or user_id in self.member_ids

    def is_admin(self, user_id: str) -> bool:
        return user_id in self.admin_ids


@dataclass(frozen=True)
class SessionUser:
    """What we sign into the session token after login."""

    user_id: str
    email: str
    name: str
    is_admin: bool = False
    is_super_user: bool = False

    @property
    def role(self) -> Role:
        if self.is_super_user:
            return Role.SUPER_USER
        if self.is_admin:
            return Role.ADMIN
        return Role.MEMBER

    @property
    def can_write(self) -> bool:
        return self.is_admin or self.is_super_user

    def to_payload(self) -> dict:
        return {
            "userId": self.user_id,
            "email": self.email,
            "name": self.name,
            "isAdmin": self.is_admin,
            "isSuperUser": self.is_super_user,
        }

    @classmethod
    def from_payload(cls, payload: dict) -> Optional["SessionUser"]:
        user_id = payload.get("userId")
        if not user_id:
            return None
        return cls(
            user_id=str(user_id),
            email=str(payload.get("email") or ""),
            name=str(payload.get("name") or ""),
            is_admin=bool(payload.get("isAdmin")),
            is_super_user=bool(payload.get("isSuperUser")),
        )
