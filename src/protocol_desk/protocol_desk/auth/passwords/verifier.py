from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import bcrypt

from ...core.constants import BCRYPT_ROUNDS
from .base import PasswordStrategy
from .bcrypt_strategy import BcryptStrategy
from .digest_strategy import Sha256DigestStrategy
from .hmac_strategy import SaltedHmacStrategy
from .pbkdf2_strategy import Pbkdf2Strategy
from .plaintext_strategy import PlaintextStrategy


def default_strategies() -> list[PasswordStrategy]:
    """Formats in the order they are tried. Current format first."""

    return [
        BcryptStrategy(),
        SaltedHmacStrategy(),
        Pbkdf2Strategy(),
        PlaintextStrategy(),
        Sha256DigestStrategy(),
    ]


@dataclass
class PasswordVerifier:
    """Tries each strategy in declared order and stops at the first match."""

    strategies: Sequence[PasswordStrategy] = field(default_factory=default_strategies)

    def match(self, password: str, stored: Optional[str]) -> Optional[str]:
        """Name of the strategy that verified the password, or None."""

        if not password or not stored:
            return None
        for strategy in self.strategies:
            if strategy.accepts(stored) and strategy.verify(password, stored):
                return strategy.name
        return None

    def verify(self, password: str, stored: Optional[str]) -> bool:
        return self.match(password, stored) is not None


def hash_password(password: str, *, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")
