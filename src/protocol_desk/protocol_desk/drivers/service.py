from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import format_hhmm
from ..common.validators import require_visitor_id
from ..core.exceptions import InvalidIdError
from ..visitors.service import VisitorService


@dataclass(frozen=True)
class DriverLink:
    link: str
    visitor: dict


class DriverLinkService:
    """Use case: shareable pickup link for the assigned driver."""

    def __init__(self, visitors: VisitorService, *, base_url: str):
        self._visitors = visitors
        self._base_url = base_url.rstrip("/")

    def generate(self, visitor_id) -> DriverLink:
        if not visitor_id:
            raise InvalidIdError("Invalid visitor ID")
        visitor = self._visitors.get(require_visitor_id(str(visitor_id)))
        details = visitor.details
        return DriverLink(
            link=f"{self._base_url}/driver/{visitor.visitor_id}",
            visitor={
                "name": details.name,
                "arrivalDate": details.arrival.day.isoformat() if details.arrival.day else "",
                "arrivalTime": format_hhmm(details.arrival.clock),
                "hotel": details.hotel,
                "driver": details.driver,
            },
        )
