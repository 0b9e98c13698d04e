from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..auth.model import SessionUser
from ..common.validators import require_visitor_id
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Visitor, VisitorDetails
from .repository import VisitorRepository
from .transform import details_from_wire

logger = logging.getLogger(__name__)


class VisitorService:
    """Use case: visitor CRUD with role checks and group-leader rules.

    Write operations take the flat wire payload; the role check runs before
    validation so a non-admin always gets AuthorizationError.
    """

    def __init__(self, visitors: VisitorRepository):
        self._visitors = visitors

    @staticmethod
    def _require_writer(actor: Optional[SessionUser], action: str) -> SessionUser:
        if actor is None or not actor.can_write:
            raise AuthorizationError(f"Only admins can {action} visitors")
        return actor

    def _check_single_leader(self, details: VisitorDetails, *, exclude_id: Optional[str] = None) -> None:
        if not details.group_id or not details.is_group_leader:
            return
        for member in self._visitors.list_by_group(details.group_id):
            if member.is_group_leader and member.visitor_id != exclude_id:
                raise ValidationError("This group already has a leader")

    def _replace(self, visitor_id: str, details: VisitorDetails) -> Visitor:
        self._check_single_leader(details, exclude_id=visitor_id)
        visitor = self._visitors.update(visitor_id, details)
        if not visitor:
            raise NotFoundError("Visitor not found")
        return visitor

    def list(self, *, search: Optional[str] = None) -> Sequence[Visitor]:
        search = (search or "").strip() or None
        return self._visitors.list(search=search)

    def get(self, visitor_id: str) -> Visitor:
        visitor_id = require_visitor_id(visitor_id)
        visitor = self._visitors.get_by_id(visitor_id)
        if not visitor:
            raise NotFoundError("Visitor not found")
        return visitor

    def create(self, actor: Optional[SessionUser], payload: Mapping[str, Any]) -> Visitor:
        actor = self._require_writer(actor, "add")
        details = details_from_wire(payload)
        self._check_single_leader(details)

        visitor = self._visitors.create(details, created_by=actor.user_id)
        logger.info("Visitor %s created by %s (group=%s)", visitor.visitor_id, actor.user_id, details.group_id)
        return visitor

    def update(self, actor: Optional[SessionUser], visitor_id: str, payload: Mapping[str, Any]) -> Visitor:
        actor = self._require_writer(actor, "edit")
        visitor_id = require_visitor_id(visitor_id)
        details = details_from_wire(payload)

        visitor = self._replace(visitor_id, details)
        logger.info("Visitor %s updated by %s", visitor_id, actor.user_id)
        return visitor

    def join_group(self, actor: Optional[SessionUser], visitor_id: str, group_id: str, *, leader: bool) -> Visitor:
        actor = self._require_writer(actor, "edit")
        current = self.get(visitor_id)
        visitor = self._replace(current.visitor_id, current.details.in_group(group_id, leader=leader))
        logger.info("Visitor %s joined group %s (leader=%s)", visitor.visitor_id, group_id, leader)
        return visitor

    def detach_from_group(self, actor: Optional[SessionUser], visitor_id: str) -> Visitor:
        """Make a grouped visitor an individual traveller again.

        Other members keep their group id; nothing cascades.
        """

        actor = self._require_writer(actor, "edit")
        current = self.get(visitor_id)
        visitor = self._replace(current.visitor_id, current.details.in_group(None, leader=False))
        logger.info("Visitor %s removed from group %s by %s", visitor.visitor_id, current.group_id, actor.user_id)
        return visitor

    def delete(self, actor: Optional[SessionUser], visitor_id: str) -> int:
        actor = self._require_writer(actor, "delete")
        visitor_id = require_visitor_id(visitor_id)
        deleted = self._visitors.delete(visitor_id)
        if not deleted:
            raise NotFoundError("Visitor not found")
        logger.info("Visitor %s deleted by %s", visitor_id, actor.user_id)
        return deleted
