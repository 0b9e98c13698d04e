from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Access level resolved at login."""

    SUPER_USER = "super_user"
    ADMIN = "admin"
    MEMBER = "member"


class ResponseStatus(str, Enum):
    """Value of the `status` field in every JSON envelope."""

    SUCCESS = "success"
    ERROR = "error"
