"""Translate between the flat wire representation and the domain model.

Wire payloads use flat camelCase strings (``"arrivalDate": "2025-03-10"``,
``"arrivalTime": "14:05"``); the domain keeps real ``date``/``time`` values so
storage can use native DATE/TIME columns. Both directions are lossless for
well-formed input.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.datetime_utils import format_hhmm, format_timestamp, parse_date_or_timestamp, parse_hhmm
from ..core.exceptions import ValidationError
from .model import TravelLeg, Visitor, VisitorDetails, VisitorPhoto

REQUIRED_FIELDS: tuple[str, ...] = (
    "name",
    "phone",
    "arrivalDate",
    "arrivalTime",
    "airline",
    "flightNumber",
    "driver",
    "hotel",
    "departureDate",
    "departureTime",
    "departureAirline",
    "departureFlightNumber",
    "driverPickupTime",
)

# Fields companions copy from the leader when a travel party is booked.
TRAVEL_FIELDS: tuple[str, ...] = (
    "arrivalDate",
    "arrivalTime",
    "airline",
    "flightNumber",
    "driver",
    "hotel",
    "departureDate",
    "departureTime",
    "departureAirline",
    "departureFlightNumber",
    "driverPickupTime",
)


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _date(payload: Mapping[str, Any], key: str):
    try:
        return parse_date_or_timestamp(_text(payload, key))
    except ValueError:
        raise ValidationError(f"{key} must be a YYYY-MM-DD date")


def _time(payload: Mapping[str, Any], key: str):
    try:
        return parse_hhmm(_text(payload, key))
    except ValueError:
        raise ValidationError(f"{key} must be a HH:MM time")


def photo_from_wire(raw: Any) -> VisitorPhoto:
    if not isinstance(raw, Mapping):
        raise ValidationError("photos must be a list of {url, publicId, uploadedAt}")
    url = _text(raw, "url")
    public_id = _text(raw, "publicId")
    if not url or not public_id:
        raise ValidationError("Each photo needs a url and a publicId")
    return VisitorPhoto(url=url, public_id=public_id, uploaded_at=_text(raw, "uploadedAt"))


def photo_to_wire(photo: VisitorPhoto) -> dict:
    return {"url": photo.url, "publicId": photo.public_id, "uploadedAt": photo.uploaded_at}


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def _group_id(payload: Mapping[str, Any]) -> Optional[str]:
    value = payload.get("groupId")
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("groupId must be a string")
    return value.strip() or None


def details_from_wire(payload: Any) -> VisitorDetails:
    """Validate a wire payload and build the domain details.

    Raises ValidationError listing every missing required field.
    """

    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")

    missing = [key for key in REQUIRED_FIELDS if not _text(payload, key)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    raw_photos = payload.get("photos") or []
    if not isinstance(raw_photos, list):
        raise ValidationError("photos must be a list")

    group_id = _group_id(payload)
    details = VisitorDetails(
        name=_text(payload, "name"),
        phone=_text(payload, "phone"),
        arrival=TravelLeg(
            day=_date(payload, "arrivalDate"),
            clock=_time(payload, "arrivalTime"),
            airline=_text(payload, "airline"),
            flight_number=_text(payload, "flightNumber"),
        ),
        driver=_text(payload, "driver"),
        hotel=_text(payload, "hotel"),
        departure=TravelLeg(
            day=_date(payload, "departureDate"),
            clock=_time(payload, "departureTime"),
            airline=_text(payload, "departureAirline"),
            flight_number=_text(payload, "departureFlightNumber"),
        ),
        driver_pickup_time=_time(payload, "driverPickupTime"),
        notes=_text(payload, "notes"),
        photos=tuple(photo_from_wire(p) for p in raw_photos),
    )
    return details.in_group(group_id, leader=_flag(payload.get("isGroupLeader")))


def details_to_wire(details: VisitorDetails) -> dict:
    return {
        "name": details.name,
        "phone": details.phone,
        "arrivalDate": details.arrival.day.isoformat() if details.arrival.day else "",
        "arrivalTime": format_hhmm(details.arrival.clock),
        "airline": details.arrival.airline,
        "flightNumber": details.arrival.flight_number,
        "driver": details.driver,
        "hotel": details.hotel,
        "departureDate": details.departure.day.isoformat() if details.departure.day else "",
        "departureTime": format_hhmm(details.departure.clock),
        "departureAirline": details.departure.airline,
        "departureFlightNumber": details.departure.flight_number,
        "driverPickupTime": format_hhmm(details.driver_pickup_time),
        "notes": details.notes,
        "photos": [photo_to_wire(p) for p in details.photos],
        "groupId": details.group_id,
        "isGroupLeader": details.is_group_leader,
    }


def visitor_to_wire(visitor: Visitor) -> dict:
    out = {"_id": visitor.visitor_id}
    out.update(details_to_wire(visitor.details))
    out["createdAt"] = format_timestamp(visitor.created_at)
    out["updatedAt"] = format_timestamp(visitor.updated_at)
    return out
