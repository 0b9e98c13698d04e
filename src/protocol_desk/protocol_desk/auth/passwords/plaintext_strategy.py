from __future__ import annotations

import hmac
import re

from .base import PasswordStrategy

_HASHED_PREFIXES = ("$2", "sha256$", "pbkdf2:")
_HEX64 = re.compile(r"^[0-9a-f]{64}$")


class PlaintextStrategy(PasswordStrategy):
    """Development accounts seeded with a raw password.

    Only used when the stored value matches none of the hashed formats.
    """

    name = "plaintext"

    def accepts(self, stored: str) -> bool:
        if not stored or stored.startswith(_HASHED_PREFIXES):
            return False
        return not _HEX64.match(stored)

    def verify(self, password: str, stored: str) -> bool:
        return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))
