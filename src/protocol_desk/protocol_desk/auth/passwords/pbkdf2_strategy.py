from __future__ import annotations

from werkzeug.security import check_password_hash

from ...core.constants import DEFAULT_PBKDF2_ITERATIONS
from .base import PasswordStrategy


class Pbkdf2Strategy(PasswordStrategy):
    """Legacy ``pbkdf2:sha256[:<iterations>]$<salt>$<hex>``.

    This is werkzeug's own layout; hashes written without an iteration count
    used 150000, so the count is filled in before handing over to werkzeug.
    """

    name = "pbkdf2"

    def __init__(self, default_iterations: int = DEFAULT_PBKDF2_ITERATIONS):
        self._default_iterations = int(default_iterations)

    def accepts(self, stored: str) -> bool:
        return stored.startswith("pbkdf2:")

    def verify(self, password: str, stored: str) -> bool:
        method, sep, rest = stored.partition("$")
        if not sep or rest.count("$") != 1:
            return False

        args = method.split(":")
        if len(args) == 2:
            method = f"{method}:{self._default_iterations}"
        elif len(args) != 3:
            return False

        try:
            return check_password_hash(f"{method}${rest}", password)
        except (ValueError, TypeError):
            return False
