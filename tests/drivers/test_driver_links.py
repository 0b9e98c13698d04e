from __future__ import annotations

import pytest

from src.protocol_desk.protocol_desk.core.exceptions import InvalidIdError, NotFoundError
from src.protocol_desk.protocol_desk.drivers.service import DriverLinkService
from src.protocol_desk.protocol_desk.visitors.service import VisitorService


def test_link_and_summary(visitor_repo, admin, visitor_payload):
    visitors = VisitorService(visitor_repo)
    visitor = visitors.create(admin, visitor_payload())

    link = DriverLinkService(visitors, base_url="https://desk.example/").generate(visitor.visitor_id)

    assert link.link == f"https://desk.example/driver/{visitor.visitor_id}"
    assert link.visitor == {
        "name": "Amina Diallo",
        "arrivalDate": "2025-03-10",
        "arrivalTime": "14:05",
        "hotel": "Radisson Blu",
        "driver": "Moussa",
    }


@pytest.mark.parametrize("bad_id", [None, "", "not-an-id"])
def test_invalid_id(visitor_repo, bad_id):
    service = DriverLinkService(VisitorService(visitor_repo), base_url="http://x")

    with pytest.raises(InvalidIdError):
        service.generate(bad_id)


def test_unknown_visitor(visitor_repo):
    service = DriverLinkService(VisitorService(visitor_repo), base_url="http://x")

    with pytest.raises(NotFoundError):
        service.generate("0" * 24)
