from __future__ import annotations

import hashlib
import hmac
import re

from .base import PasswordStrategy

_HEX64 = re.compile(r"^[0-9a-f]{64}$")


class Sha256DigestStrategy(PasswordStrategy):
    """Unsalted SHA-256 hex digest from the oldest imports."""

    name = "sha256-digest"

    def accepts(self, stored: str) -> bool:
        return bool(_HEX64.match(stored))

    def verify(self, password: str, stored: str) -> bool:
        digest = hashlib.sha256(password.encode("utf-8")).hexdigest()
        return hmac.compare_digest(digest, stored)
