from __future__ import annotations

import secrets
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, escape_like, fetchall, fetchone, normalize_mysql_time
from .model import TravelLeg, Visitor, VisitorDetails, VisitorPhoto
from .repository import VisitorRepository

_COLUMNS = """
    visitor_id, name, phone,
    arrival_date, arrival_hour, airline, flight_number,
    driver, hotel,
    departure_date, departure_hour, departure_airline, departure_flight_number,
    driver_pickup_time, notes, group_id, is_group_leader,
    created_by, created_at, updated_at
"""

_SEARCH_COLUMNS = ("name", "phone", "hotel", "driver")


def _new_visitor_id() -> str:
    return secrets.token_hex(12)


def _row_to_visitor(row: dict, photos: Sequence[VisitorPhoto]) -> Visitor:
    details = VisitorDetails(
        name=row.get("name") or "",
        phone=row.get("phone") or "",
        arrival=TravelLeg(
            day=row.get("arrival_date"),
            clock=normalize_mysql_time(row.get("arrival_hour")),
            airline=row.get("airline") or "",
            flight_number=row.get("flight_number") or "",
        ),
        driver=row.get("driver") or "",
        hotel=row.get("hotel") or "",
        departure=TravelLeg(
            day=row.get("departure_date"),
            clock=normalize_mysql_time(row.get("departure_hour")),
            airline=row.get("departure_airline") or "",
            flight_number=row.get("departure_flight_number") or "",
        ),
        driver_pickup_time=normalize_mysql_time(row.get("driver_pickup_time")),
        notes=row.get("notes") or "",
        photos=tuple(photos),
        group_id=row.get("group_id") or None,
        is_group_leader=bool(row.get("is_group_leader")),
    )
    return Visitor(
        visitor_id=row["visitor_id"],
        details=details,
        created_by=row.get("created_by"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _detail_params(details: VisitorDetails) -> tuple:
    return (
        details.name,
        details.phone,
        details.arrival.day,
        details.arrival.clock,
        details.arrival.airline,
        details.arrival.flight_number,
        details.driver,
        details.hotel,
        details.departure.day,
        details.departure.clock,
        details.departure.airline,
        details.departure.flight_number,
        details.driver_pickup_time,
        details.notes,
        details.group_id,
        1 if details.is_group_leader else 0,
    )


class MySQLVisitorRepository(VisitorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_photos(self, cur, visitor_ids: Sequence[str]) -> dict[str, list[VisitorPhoto]]:
        out: dict[str, list[VisitorPhoto]] = {vid: [] for vid in visitor_ids}
        if not visitor_ids:
            return out
        placeholders = ",".join(["%s"] * len(visitor_ids))
        cur.execute(
            f"""
            SELECT visitor_id, url, public_id, uploaded_at
            FROM visitor_photos
            WHERE visitor_id IN ({placeholders})
            ORDER BY visitor_id, position
            """,
            tuple(visitor_ids),
        )
        for r in fetchall(cur):
            out[r["visitor_id"]].append(
                VisitorPhoto(url=r["url"], public_id=r["public_id"], uploaded_at=r.get("uploaded_at") or "")
            )
        return out

    def _replace_photos(self, cur, visitor_id: str, photos: Sequence[VisitorPhoto]) -> None:
        cur.execute("DELETE FROM visitor_photos WHERE visitor_id=%s", (visitor_id,))
        for position, photo in enumerate(photos):
            cur.execute(
                """
                INSERT INTO visitor_photos(visitor_id, position, url, public_id, uploaded_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (visitor_id, position, photo.url, photo.public_id, photo.uploaded_at),
            )

    def _get(self, cur, visitor_id: str) -> Optional[Visitor]:
        cur.execute(f"SELECT {_COLUMNS} FROM visitors WHERE visitor_id=%s", (visitor_id,))
        row = fetchone(cur)
        if not row:
            return None
        photos = self._load_photos(cur, [row["visitor_id"]])
        return _row_to_visitor(row, photos[row["visitor_id"]])

    def list(self, *, search: Optional[str] = None) -> Sequence[Visitor]:
        clauses: list[str] = []
        params: list[object] = []
        if search:
            pattern = f"%{escape_like(search.lower())}%"
            clauses = [f"LOWER({col}) LIKE %s" for col in _SEARCH_COLUMNS]
            params = [pattern] * len(_SEARCH_COLUMNS)

        where = f"WHERE {' OR '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM visitors
                {where}
                ORDER BY arrival_date DESC, created_at ASC, visitor_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            photos = self._load_photos(cur, [r["visitor_id"] for r in rows])
            return [_row_to_visitor(r, photos[r["visitor_id"]]) for r in rows]

    def get_by_id(self, visitor_id: str) -> Optional[Visitor]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._get(cur, visitor_id)

    def list_by_group(self, group_id: str) -> Sequence[Visitor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM visitors WHERE group_id=%s ORDER BY created_at ASC, visitor_id ASC",
                (group_id,),
            )
            rows = fetchall(cur)
            photos = self._load_photos(cur, [r["visitor_id"] for r in rows])
            return [_row_to_visitor(r, photos[r["visitor_id"]]) for r in rows]

    def create(self, details: VisitorDetails, *, created_by: Optional[str] = None) -> Visitor:
        visitor_id = _new_visitor_id()
        now = datetime.now()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO visitors(
                    visitor_id, name, phone,
                    arrival_date, arrival_hour, airline, flight_number,
                    driver, hotel,
                    departure_date, departure_hour, departure_airline, departure_flight_number,
                    driver_pickup_time, notes, group_id, is_group_leader,
                    created_by, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (visitor_id, *_detail_params(details), created_by, now, now),
            )
            self._replace_photos(cur, visitor_id, details.photos)

        return Visitor(visitor_id=visitor_id, details=details, created_by=created_by, created_at=now, updated_at=now)

    def update(self, visitor_id: str, details: VisitorDetails) -> Optional[Visitor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT visitor_id FROM visitors WHERE visitor_id=%s FOR UPDATE", (visitor_id,))
            if not fetchone(cur):
                return None

            cur.execute(
                """
                UPDATE visitors
                SET name=%s, phone=%s,
                    arrival_date=%s, arrival_hour=%s, airline=%s, flight_number=%s,
                    driver=%s, hotel=%s,
                    departure_date=%s, departure_hour=%s, departure_airline=%s, departure_flight_number=%s,
                    driver_pickup_time=%s, notes=%s, group_id=%s, is_group_leader=%s,
                    updated_at=%s
                WHERE visitor_id=%s
                """,
                (*_detail_params(details), datetime.now(), visitor_id),
            )
            self._replace_photos(cur, visitor_id, details.photos)
            return self._get(cur, visitor_id)

    def delete(self, visitor_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM visitor_photos WHERE visitor_id=%s", (visitor_id,))
            cur.execute("DELETE FROM visitors WHERE visitor_id=%s", (visitor_id,))
            return int(cur.rowcount)
