from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..grouping.model import VisitorPartition, WeekGroup
from ..grouping.partition import partition_by_group
from ..grouping.weeks import bucket_by_arrival_week, format_week_range, is_in_current_week, is_today
from ..visitors.model import Visitor
from ..visitors.service import VisitorService
from ..visitors.transform import visitor_to_wire


@dataclass(frozen=True)
class DashboardStats:
    total: int
    this_week: int
    today: int


@dataclass(frozen=True)
class WeekView:
    week: WeekGroup
    label: str
    partitions: tuple[VisitorPartition, ...]

    @property
    def count(self) -> int:
        return len(self.week.visitors)


@dataclass(frozen=True)
class DashboardView:
    stats: DashboardStats
    weeks: tuple[WeekView, ...]
    search: str = ""


def build_dashboard(visitors: list[Visitor], *, now: datetime, search: str = "") -> DashboardView:
    stats = DashboardStats(
        total=len(visitors),
        this_week=sum(1 for v in visitors if is_in_current_week(v, now)),
        today=sum(1 for v in visitors if is_today(v, now)),
    )
    weeks = tuple(
        WeekView(week=w, label=format_week_range(w), partitions=tuple(partition_by_group(w.visitors)))
        for w in bucket_by_arrival_week(visitors)
    )
    return DashboardView(stats=stats, weeks=weeks, search=search)


def empty_dashboard(search: str = "") -> DashboardView:
    return DashboardView(stats=DashboardStats(total=0, this_week=0, today=0), weeks=(), search=search)


def dashboard_to_wire(view: DashboardView) -> dict:
    return {
        "stats": {"total": view.stats.total, "thisWeek": view.stats.this_week, "today": view.stats.today},
        "weeks": [
            {
                "weekStart": w.week.week_start.isoformat() if w.week.week_start else None,
                "weekEnd": w.week.week_end.isoformat() if w.week.week_end else None,
                "label": w.label,
                "count": w.count,
                "partitions": [
                    {
                        "groupId": p.group_id,
                        "isGroup": p.is_group,
                        "visitors": [visitor_to_wire(v) for v in p.members],
                    }
                    for p in w.partitions
                ],
            }
            for w in view.weeks
        ],
    }


class DashboardService:
    def __init__(self, visitors: VisitorService):
        self._visitors = visitors

    def build(self, *, search: Optional[str] = None, now: Optional[datetime] = None) -> DashboardView:
        now = now or now_local()
        visitors = list(self._visitors.list(search=search))
        return build_dashboard(visitors, now=now, search=(search or "").strip())
