from __future__ import annotations

import hashlib
import hmac

from .base import PasswordStrategy


class SaltedHmacStrategy(PasswordStrategy):
    """Legacy ``sha256$<salt>$<hex>``: HMAC-SHA256 keyed with the salt."""

    name = "sha256-hmac"

    def accepts(self, stored: str) -> bool:
        return stored.startswith("sha256$")

    def verify(self, password: str, stored: str) -> bool:
        parts = stored.split("$")
        if len(parts) != 3:
            return False
        _, salt, expected = parts
        digest = hmac.new(salt.encode("utf-8"), password.encode("utf-8"), hashlib.sha256).hexdigest()
        return hmac.compare_digest(digest, expected)
