from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class VisitorPhoto:
    """Reference to an image stored on the hosted image service."""

    url: str
    public_id: str
    uploaded_at: str


@dataclass(frozen=True)
class TravelLeg:
    """One flight: arrival or departure. Times are naive wall-clock values."""

    day: Optional[date]
    clock: Optional[time]
    airline: str
    flight_number: str


@dataclass(frozen=True)
class VisitorDetails:
    """Mutable fields of a visitor, as accepted by create/update."""

    name: str
    phone: str
    arrival: TravelLeg
    driver: str
    hotel: str
    departure: TravelLeg
    driver_pickup_time: Optional[time]
    notes: str = ""
    photos: tuple[VisitorPhoto, ...] = field(default_factory=tuple)
    group_id: Optional[str] = None
    is_group_leader: bool = False

    def in_group(self, group_id: Optional[str], *, leader: bool) -> "VisitorDetails":
        if not group_id:
            return replace(self, group_id=None, is_group_leader=False)
        return replace(self, group_id=group_id, is_group_leader=bool(leader))


@dataclass(frozen=True)
class Visitor:
    """Domain entity: one person's single trip record."""

    visitor_id: str
    details: VisitorDetails
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def name(self) -> str:
        return self.details.name

    @property
    def arrival_date(self) -> Optional[date]:
        return self.details.arrival.day

    @property
    def group_id(self) -> Optional[str]:
        return self.details.group_id

    @property
    def is_group_leader(self) -> bool:
        return self.details.is_group_leader
