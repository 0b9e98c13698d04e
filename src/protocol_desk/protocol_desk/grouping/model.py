from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..visitors.model import Visitor


@dataclass(frozen=True)
class WeekGroup:
    """Visitors arriving in one Sunday..Saturday window (read-model, never stored).

    ``week_start``/``week_end`` are None for the unscheduled bucket, which holds
    visitors whose arrival date is missing or unparsable.
    """

    week_start: Optional[date]
    week_end: Optional[date]
    visitors: tuple[Visitor, ...]

    @property
    def is_unscheduled(self) -> bool:
        return self.week_start is None


@dataclass(frozen=True)
class VisitorPartition:
    group_id: Optional[str]
    members: tuple[Visitor, ...]
    is_group: bool
