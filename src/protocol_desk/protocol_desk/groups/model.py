from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..visitors.model import Visitor


@dataclass(frozen=True)
class CompanionFailure:
    index: int
    name: str
    message: str


@dataclass(frozen=True)
class GroupBookingResult:
    """Outcome of a leader + companions booking. Not transactional."""

    leader: Visitor
    group_id: Optional[str]
    companions: tuple[Visitor, ...] = field(default_factory=tuple)
    failures: tuple[CompanionFailure, ...] = field(default_factory=tuple)

    @property
    def requested(self) -> int:
        return len(self.companions) + len(self.failures)

    @property
    def failed(self) -> int:
        return len(self.failures)

    def summary(self) -> str:
        if self.failures:
            return f"{self.failed} of {self.requested} companions failed"
        total = 1 + len(self.companions)
        return f"Added {total} visitor{'s' if total != 1 else ''}"
