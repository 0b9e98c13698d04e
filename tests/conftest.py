from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.protocol_desk.protocol_desk import create_app
from src.protocol_desk.protocol_desk.auth.model import DepartmentMembership, SessionUser, User
from src.protocol_desk.protocol_desk.container import assemble
from src.protocol_desk.protocol_desk.core.exceptions import UploadError
from src.protocol_desk.protocol_desk.visitors.model import Visitor, VisitorDetails, VisitorPhoto


class InMemoryVisitorRepository:
    """Dict-backed stand-in for the MySQL repository.

    Ids are sequential 24-hex strings and creation times advance one second per
    insert, so ordering is deterministic.
    """

    def __init__(self):
        self._rows: dict[str, Visitor] = {}
        self._seq = 0
        self._lock = threading.Lock()
        self.fail_on_names: set[str] = set()

    def list(self, *, search=None):
        rows = list(self._rows.values())
        if search:
            needle = search.lower()
            rows = [
                v
                for v in rows
                if any(needle in (f or "").lower() for f in (v.name, v.details.phone, v.details.hotel, v.details.driver))
            ]
        rows.sort(key=lambda v: (v.created_at, v.visitor_id))
        rows.sort(key=lambda v: v.arrival_date or date.min, reverse=True)
        return rows

    def get_by_id(self, visitor_id):
        return self._rows.get(visitor_id)

    def list_by_group(self, group_id):
        return [v for v in self.list() if v.group_id == group_id]

    def create(self, details: VisitorDetails, *, created_by=None):
        if details.name in self.fail_on_names:
            raise RuntimeError(f"storage rejected {details.name}")
        with self._lock:
            self._seq += 1
            visitor_id = f"{self._seq:024x}"
            created = datetime(2025, 1, 1, 9, 0, 0) + timedelta(seconds=self._seq)
            visitor = Visitor(
                visitor_id=visitor_id,
                details=details,
                created_by=created_by,
                created_at=created,
                updated_at=created,
            )
            self._rows[visitor_id] = visitor
            return visitor

    def update(self, visitor_id, details):
        with self._lock:
            current = self._rows.get(visitor_id)
            if not current:
                return None
            updated = replace(current, details=details, updated_at=current.updated_at + timedelta(minutes=1))
            self._rows[visitor_id] = updated
            return updated

    def delete(self, visitor_id):
        with self._lock:
            return 1 if self._rows.pop(visitor_id, None) else 0


class InMemoryUserRepository:
    def __init__(self, users=(), department: Optional[DepartmentMembership] = None):
        self._users = {u.email: u for u in users}
        self.department = department

    def get_by_email(self, email):
        return self._users.get(email)

    def get_department(self, name):
        if self.department and self.department.dept_name == name:
            return self.department
        return None


class FakeUploader:
    def __init__(self):
        self.calls: list[str] = []
        self.fail_on: set[str] = set()

    def upload(self, photo):
        self.calls.append(photo.filename)
        if photo.filename in self.fail_on:
            raise UploadError("Upload failed")
        return VisitorPhoto(
            url=f"https://img.example/{photo.filename}",
            public_id=f"protocol-visitors/{photo.filename}",
            uploaded_at="2025-03-12T10:00:00.000Z",
        )


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday; its week runs Sun 2025-03-09 .. Sat 2025-03-15
    return datetime(2025, 3, 12, 10, 30, 0)


@pytest.fixture
def admin() -> SessionUser:
    return SessionUser(user_id="a" * 24, email="admin@protocol.local", name="Admin", is_admin=True)


@pytest.fixture
def member() -> SessionUser:
    return SessionUser(user_id="b" * 24, email="member@protocol.local", name="Member")


@pytest.fixture
def visitor_repo() -> InMemoryVisitorRepository:
    return InMemoryVisitorRepository()


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    users = [
        User(user_id="a" * 24, email="admin@protocol.local", name="Admin", password_hash="admin123"),
        User(user_id="b" * 24, email="member@protocol.local", name="Member", password_hash="member123"),
        User(user_id="c" * 24, email="outsider@protocol.local", name="Outsider", password_hash="outsider123"),
        User(user_id="d" * 24, email="root@protocol.local", name="Root", password_hash="root123", is_super_user=True),
    ]
    department = DepartmentMembership(
        dept_id=1,
        dept_name="Protocol Department",
        admin_ids=frozenset({"a" * 24}),
        member_ids=frozenset({"b" * 24}),
    )
    return InMemoryUserRepository(users, department)


@pytest.fixture
def uploader() -> FakeUploader:
    return FakeUploader()


@pytest.fixture
def container(visitor_repo, user_repo, uploader):
    return assemble(
        users_repo=user_repo,
        visitors_repo=visitor_repo,
        uploader=uploader,
        secret_key="test-secret",
        app_url="http://testserver",
        max_companion_workers=4,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(container):
    def _headers(user: SessionUser) -> dict:
        return {"Authorization": f"Bearer {container.token_signer.issue(user)}"}

    return _headers


@pytest.fixture
def visitor_payload():
    def _payload(**overrides) -> dict:
        payload = {
            "name": "Amina Diallo",
            "phone": "+221 77 000 0000",
            "arrivalDate": "2025-03-10",
            "arrivalTime": "14:05",
            "airline": "Air Senegal",
            "flightNumber": "HC 401",
            "driver": "Moussa",
            "hotel": "Radisson Blu",
            "departureDate": "2025-03-14",
            "departureTime": "22:30",
            "departureAirline": "Air Senegal",
            "departureFlightNumber": "HC 402",
            "driverPickupTime": "13:30",
            "notes": "",
            "photos": [],
        }
        payload.update(overrides)
        return payload

    return _payload
