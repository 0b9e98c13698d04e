from __future__ import annotations

from typing import Optional, Protocol

from .model import DepartmentMembership, User


class UserRepository(Protocol):
    """Repository interface for accounts and department membership."""

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_department(self, name: str) -> Optional[DepartmentMembership]:
        raise NotImplementedError
