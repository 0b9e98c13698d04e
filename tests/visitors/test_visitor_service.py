from __future__ import annotations

import pytest

from src.protocol_desk.protocol_desk.core.exceptions import (
    AuthorizationError,
    InvalidIdError,
    NotFoundError,
    ValidationError,
)
from src.protocol_desk.protocol_desk.visitors.service import VisitorService
from src.protocol_desk.protocol_desk.visitors.transform import visitor_to_wire


def test_create_then_get_returns_same_wire_fields(visitor_repo, admin, visitor_payload):
    service = VisitorService(visitor_repo)
    payload = visitor_payload()

    created = service.create(admin, payload)
    fetched = visitor_to_wire(service.get(created.visitor_id))

    for key, value in payload.items():
        assert fetched[key] == value, key
    assert fetched["_id"] == created.visitor_id
    assert created.created_by == admin.user_id


def test_member_cannot_create_and_nothing_is_stored(visitor_repo, member, visitor_payload):
    service = VisitorService(visitor_repo)

    with pytest.raises(AuthorizationError, match="Only admins can add visitors"):
        service.create(member, visitor_payload())

    assert list(service.list()) == []


def test_role_check_runs_before_validation(visitor_repo, member):
    service = VisitorService(visitor_repo)

    with pytest.raises(AuthorizationError):
        service.create(member, {"name": ""})


def test_anonymous_cannot_delete(visitor_repo, admin, visitor_payload):
    service = VisitorService(visitor_repo)
    visitor = service.create(admin, visitor_payload())

    with pytest.raises(AuthorizationError, match="Only admins can delete visitors"):
        service.delete(None, visitor.visitor_id)


def test_delete_missing_id_is_not_found(visitor_repo, admin):
    service = VisitorService(visitor_repo)

    with pytest.raises(NotFoundError):
        service.delete(admin, "f" * 24)


def test_delete_removes_record(visitor_repo, admin, visitor_payload):
    service = VisitorService(visitor_repo)
    visitor = service.create(admin, visitor_payload())

    assert service.delete(admin, visitor.visitor_id) == 1
    with pytest.raises(NotFoundError):
        service.get(visitor.visitor_id)


@pytest.mark.parametrize("bad_id", ["", "123", "z" * 24, "a" * 25])
def test_malformed_ids_are_rejected(visitor_repo, admin, bad_id):
    service = VisitorService(visitor_repo)

    with pytest.raises(InvalidIdError):
        service.get(bad_id)
    with pytest.raises(InvalidIdError):
        service.delete(admin, bad_id)


def test_update_is_full_replace(visitor_repo, admin, visitor_payload):
    service = VisitorService(visitor_repo)
    visitor = service.create(admin, visitor_payload(notes="first"))

    updated = service.update(admin, visitor.visitor_id, visitor_payload(hotel="Pullman", notes=""))

    assert updated.details.hotel == "Pullman"
    assert updated.details.notes == ""
    assert updated.created_at == visitor.created_at


def test_invalid_update_leaves_record_unchanged(visitor_repo, admin, visitor_payload):
    service = VisitorService(visitor_repo)
    visitor = service.create(admin, visitor_payload())

    with pytest.raises(ValidationError):
        service.update(admin, visitor.visitor_id, visitor_payload(hotel=""))

    assert service.get(visitor.visitor_id).details.hotel == "Radisson Blu"


def test_update_missing_visitor_is_not_found(visitor_repo, admin, visitor_payload):
    service = VisitorService(visitor_repo)

    with pytest.raises(NotFoundError):
        service.update(admin, "e" * 24, visitor_payload())


def test_second_leader_in_group_is_rejected(visitor_repo, admin, visitor_payload):
    service = VisitorService(visitor_repo)
    service.create(admin, visitor_payload(groupId="group_1_aaa", isGroupLeader=True))

    with pytest.raises(ValidationError, match="already has a leader"):
        service.create(admin, visitor_payload(name="Other", groupId="group_1_aaa", isGroupLeader=True))


def test_leader_can_be_resaved(visitor_repo, admin, visitor_payload):
    service = VisitorService(visitor_repo)
    payload = visitor_payload(groupId="group_1_aaa", isGroupLeader=True)
    leader = service.create(admin, payload)

    updated = service.update(admin, leader.visitor_id, dict(payload, notes="updated"))

    assert updated.is_group_leader


def test_search_matches_name_phone_hotel_driver(visitor_repo, admin, visitor_payload):
    service = VisitorService(visitor_repo)
    service.create(admin, visitor_payload(name="Jean Dupont", hotel="Terrou-Bi"))
    service.create(admin, visitor_payload(name="Ana Silva", driver="Ibrahima"))

    assert [v.name for v in service.list(search="dupont")] == ["Jean Dupont"]
    assert [v.name for v in service.list(search="IBRA")] == ["Ana Silva"]
    assert [v.name for v in service.list(search="terrou")] == ["Jean Dupont"]
    assert len(service.list(search="   ")) == 2


def test_detach_clears_group_without_touching_others(visitor_repo, admin, visitor_payload):
    service = VisitorService(visitor_repo)
    leader = service.create(admin, visitor_payload(groupId="group_1_aaa", isGroupLeader=True))
    companion = service.create(admin, visitor_payload(name="Companion", groupId="group_1_aaa"))

    detached = service.detach_from_group(admin, leader.visitor_id)

    assert detached.group_id is None
    assert detached.is_group_leader is False
    assert service.get(companion.visitor_id).group_id == "group_1_aaa"
