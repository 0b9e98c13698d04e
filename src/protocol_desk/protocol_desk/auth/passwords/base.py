from __future__ import annotations

from abc import ABC, abstractmethod


class PasswordStrategy(ABC):
    """Strategy Pattern: one stored-password format we can verify against."""

    name: str = "unknown"

    @abstractmethod
    def accepts(self, stored: str) -> bool:
        """True when ``stored`` looks like this strategy's format."""

        raise NotImplementedError

    @abstractmethod
    def verify(self, password: str, stored: str) -> bool:
        raise NotImplementedError
