from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Visitor, VisitorDetails


class VisitorRepository(Protocol):
    """Repository interface for visitors.

    Ids and audit timestamps are assigned by the implementation. Every write is
    a single transaction.
    """

    def list(self, *, search: Optional[str] = None) -> Sequence[Visitor]:
        """Visitors matching ``search`` (case-insensitive substring over name,
        phone, hotel or driver), newest arrival first."""

        raise NotImplementedError

    def get_by_id(self, visitor_id: str) -> Optional[Visitor]:
        raise NotImplementedError

    def list_by_group(self, group_id: str) -> Sequence[Visitor]:
        raise NotImplementedError

    def create(self, details: VisitorDetails, *, created_by: Optional[str] = None) -> Visitor:
        raise NotImplementedError

    def update(self, visitor_id: str, details: VisitorDetails) -> Optional[Visitor]:
        """Replace all mutable fields. Returns None when the id is unknown."""

        raise NotImplementedError

    def delete(self, visitor_id: str) -> int:
        """Returns the number of deleted records (0 or 1)."""

        raise NotImplementedError
