from __future__ import annotations

import bcrypt

from .base import PasswordStrategy


class BcryptStrategy(PasswordStrategy):
    """``$2a$`` / ``$2b$`` / ``$2y$`` hashes (current format)."""

    name = "bcrypt"

    def accepts(self, stored: str) -> bool:
        return stored.startswith("$2")

    def verify(self, password: str, stored: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), stored.encode("utf-8"))
        except ValueError:
            # malformed salt
            return False
