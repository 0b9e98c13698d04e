from __future__ import annotations

import logging

from ..core.constants import DEFAULT_DEPARTMENT_NAME
from ..core.exceptions import AuthenticationError, AuthorizationError, ConfigurationError, ValidationError
from .model import SessionUser
from .passwords.verifier import PasswordVerifier
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate a staff member (login)."""

    def __init__(
        self,
        users: UserRepository,
        *,
        verifier: PasswordVerifier | None = None,
        department_name: str = DEFAULT_DEPARTMENT_NAME,
    ):
        self._users = users
        self._verifier = verifier or PasswordVerifier()
        self._department_name = department_name

    def authenticate(self, email: str, password: str) -> SessionUser:
        if not email or not password:
            raise ValidationError("Email and password are required")

        normalized = email.strip().lower()
        user = self._users.get_by_email(normalized)
        if not user:
            raise AuthenticationError("Invalid credentials")

        matched = self._verifier.match(password, user.password_hash)
        if not matched:
            logger.info("Failed login for %s", normalized)
            raise AuthenticationError("Invalid credentials")
        if matched != "bcrypt":
            logger.warning("User %s logged in with legacy password format %s", user.user_id, matched)

        department = self._users.get_department(self._department_name)
        if not department and not user.is_super_user:
            raise ConfigurationError(f"{self._department_name} not configured")

        if not user.is_super_user and not department.includes(user.user_id):
            raise AuthorizationError(f"Access denied. You are not a member of the {self._department_name}.")

        is_admin = user.is_super_user or bool(department and department.is_admin(user.user_id))
        session = SessionUser(
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            is_admin=is_admin,
            is_super_user=user.is_super_user,
        )
        logger.info("User %s logged in as %s", user.user_id, session.role.value)
        return session
