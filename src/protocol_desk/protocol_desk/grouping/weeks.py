"""Week-window arithmetic shared by bucketing and the dashboard filters.

A week runs Sunday through Saturday in local wall-clock terms. Every week
computation goes through :func:`week_window` so bucketing and the
today/this-week predicates cannot drift apart.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import parse_date_or_timestamp
from ..visitors.model import Visitor
from .model import WeekGroup


def week_window(day: date) -> tuple[date, date]:
    """(Sunday at or before ``day``, the following Saturday)."""
    # date.weekday(): Monday=0 .. Sunday=6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def arrival_day(visitor: Visitor) -> Optional[date]:
    """Arrival date as a calendar date, or None when missing/unparsable."""
    value = getattr(visitor, "arrival_date", None)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_date_or_timestamp(value)
        except ValueError:
            return None
    return None


def bucket_by_arrival_week(visitors: Iterable[Visitor]) -> list[WeekGroup]:
    """Bucket visitors by arrival week, newest week first.

    Input order is kept inside each bucket. Visitors without a usable arrival
    date go to a trailing unscheduled bucket instead of being mis-sorted.
    """

    buckets: dict[date, list[Visitor]] = {}
    unscheduled: list[Visitor] = []

    for visitor in visitors:
        day = arrival_day(visitor)
        if day is None:
            unscheduled.append(visitor)
            continue
        start, _ = week_window(day)
        buckets.setdefault(start, []).append(visitor)

    out = [
        WeekGroup(week_start=start, week_end=week_window(start)[1], visitors=tuple(buckets[start]))
        for start in sorted(buckets, reverse=True)
    ]
    if unscheduled:
        out.append(WeekGroup(week_start=None, week_end=None, visitors=tuple(unscheduled)))
    return out


def is_in_current_week(visitor: Visitor, now: datetime) -> bool:
    day = arrival_day(visitor)
    if day is None:
        return False
    start, end = week_window(now.date())
    return start <= day <= end


def is_today(visitor: Visitor, now: datetime) -> bool:
    return arrival_day(visitor) == now.date()


def format_week_range(week: WeekGroup) -> str:
    """"Mar 09 - Mar 15, 2025"."""
    if week.is_unscheduled:
        return "Unscheduled"
    return f"{week.week_start:%b %d} - {week.week_end:%b %d, %Y}"
