from __future__ import annotations

import logging
import secrets
import string
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Mapping, Optional, Sequence

from ..auth.model import SessionUser
from ..core.constants import MAX_COMPANION_WORKERS
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from ..visitors.model import Visitor
from ..visitors.service import VisitorService
from ..visitors.transform import TRAVEL_FIELDS, details_to_wire
from .model import CompanionFailure, GroupBookingResult

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def generate_group_id() -> str:
    """``group_<epoch-ms>_<9 base36 chars>``."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"group_{int(time.time() * 1000)}_{suffix}"


def companion_payload(travel: Mapping[str, Any], companion: Mapping[str, Any], group_id: str) -> dict:
    """Wire payload for one companion: shared travel fields + personal fields."""
    payload = {key: travel.get(key) for key in TRAVEL_FIELDS}
    payload.update(
        {
            "name": companion.get("name"),
            "phone": companion.get("phone"),
            "notes": companion.get("notes") or "",
            "photos": companion.get("photos") or [],
            "groupId": group_id,
            "isGroupLeader": False,
        }
    )
    return payload


class GroupBookingService:
    """Use case: book a travel party (leader + companions).

    The leader is written first; companions are then written concurrently and
    independently. A failed companion never rolls back the others or the
    leader; failures are reported in the result.
    """

    def __init__(self, visitors: VisitorService, *, max_workers: int = MAX_COMPANION_WORKERS):
        self._visitors = visitors
        self._max_workers = max(1, int(max_workers))

    @staticmethod
    def _companions(raw: Any) -> Sequence[Mapping[str, Any]]:
        if raw is None:
            return []
        if not isinstance(raw, list) or not all(isinstance(c, Mapping) for c in raw):
            raise ValidationError("companions must be a list of objects")
        return raw

    def _create_companions(
        self,
        actor: SessionUser,
        travel: Mapping[str, Any],
        companions: Sequence[Mapping[str, Any]],
        group_id: str,
    ) -> tuple[tuple[Visitor, ...], tuple[CompanionFailure, ...]]:
        def create_one(companion: Mapping[str, Any]) -> Visitor:
            return self._visitors.create(actor, companion_payload(travel, companion, group_id))

        workers = min(self._max_workers, len(companions))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="companion") as pool:
            futures = [pool.submit(create_one, c) for c in companions]

        created: list[Visitor] = []
        failures: list[CompanionFailure] = []
        for index, (companion, future) in enumerate(zip(companions, futures)):
            exc = future.exception()
            if exc is None:
                created.append(future.result())
                continue
            message = str(exc) if isinstance(exc, DomainError) else "Failed to create visitor"
            if not isinstance(exc, DomainError):
                logger.error("Companion %s of group %s failed", index, group_id, exc_info=exc)
            failures.append(CompanionFailure(index=index, name=str(companion.get("name") or ""), message=message))

        if failures:
            logger.warning("%s of %s companions failed for group %s", len(failures), len(companions), group_id)
        return tuple(created), tuple(failures)

    def book(self, actor: Optional[SessionUser], leader: Any, companions: Any = None) -> GroupBookingResult:
        if actor is None or not actor.can_write:
            raise AuthorizationError("Only admins can add visitors")
        if not isinstance(leader, Mapping):
            raise ValidationError("leader must be a JSON object")
        companions = self._companions(companions)

        if not companions:
            solo = dict(leader, groupId=None, isGroupLeader=False)
            return GroupBookingResult(leader=self._visitors.create(actor, solo), group_id=None)

        group_id = generate_group_id()
        leader_visitor = self._visitors.create(actor, dict(leader, groupId=group_id, isGroupLeader=True))

        created, failures = self._create_companions(actor, leader, companions, group_id)
        return GroupBookingResult(leader=leader_visitor, group_id=group_id, companions=created, failures=failures)

    def add_companions(self, actor: Optional[SessionUser], visitor_id: str, companions: Any) -> GroupBookingResult:
        """Attach new companions to an existing visitor.

        A visitor without a group starts a new one and becomes its leader.
        Companions copy the visitor's current travel fields.
        """

        if actor is None or not actor.can_write:
            raise AuthorizationError("Only admins can add visitors")
        companions = self._companions(companions)
        if not companions:
            raise ValidationError("At least one companion is required")

        anchor = self._visitors.get(visitor_id)
        group_id = anchor.group_id
        if not group_id:
            group_id = generate_group_id()
            anchor = self._visitors.join_group(actor, anchor.visitor_id, group_id, leader=True)

        travel = details_to_wire(anchor.details)
        created, failures = self._create_companions(actor, travel, companions, group_id)
        return GroupBookingResult(leader=anchor, group_id=group_id, companions=created, failures=failures)
