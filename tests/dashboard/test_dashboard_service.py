from __future__ import annotations

from datetime import date

from src.protocol_desk.protocol_desk.dashboard.service import DashboardService, dashboard_to_wire
from src.protocol_desk.protocol_desk.groups.service import GroupBookingService
from src.protocol_desk.protocol_desk.visitors.service import VisitorService


def seed(visitor_repo, admin, visitor_payload) -> VisitorService:
    visitors = VisitorService(visitor_repo)
    visitors.create(admin, visitor_payload(name="Today Guest", arrivalDate="2025-03-12"))
    visitors.create(admin, visitor_payload(name="Sunday Guest", arrivalDate="2025-03-09"))
    visitors.create(admin, visitor_payload(name="Last Week", arrivalDate="2025-03-05"))
    GroupBookingService(visitors, max_workers=2).book(
        admin,
        visitor_payload(name="Leader", arrivalDate="2025-03-20"),
        [{"name": "Follower", "phone": "1"}],
    )
    return visitors


def test_stats_count_today_and_this_week(visitor_repo, admin, visitor_payload, fixed_now):
    view = DashboardService(seed(visitor_repo, admin, visitor_payload)).build(now=fixed_now)

    assert view.stats.total == 5
    assert view.stats.this_week == 2
    assert view.stats.today == 1


def test_weeks_newest_first_with_group_partition(visitor_repo, admin, visitor_payload, fixed_now):
    view = DashboardService(seed(visitor_repo, admin, visitor_payload)).build(now=fixed_now)

    assert [w.week.week_start for w in view.weeks] == [date(2025, 3, 16), date(2025, 3, 9), date(2025, 3, 2)]
    assert [w.label for w in view.weeks][1] == "Mar 09 - Mar 15, 2025"

    group_week = view.weeks[0]
    assert group_week.count == 2
    assert len(group_week.partitions) == 1
    assert group_week.partitions[0].is_group
    assert [v.name for v in group_week.partitions[0].members] == ["Leader", "Follower"]

    this_week = view.weeks[1]
    assert [p.is_group for p in this_week.partitions] == [False, False]


def test_search_narrows_stats_and_weeks(visitor_repo, admin, visitor_payload, fixed_now):
    view = DashboardService(seed(visitor_repo, admin, visitor_payload)).build(search="guest", now=fixed_now)

    assert view.stats.total == 2
    assert view.search == "guest"
    assert len(view.weeks) == 1


def test_wire_shape(visitor_repo, admin, visitor_payload, fixed_now):
    view = DashboardService(seed(visitor_repo, admin, visitor_payload)).build(now=fixed_now)

    wire = dashboard_to_wire(view)

    assert wire["stats"] == {"total": 5, "thisWeek": 2, "today": 1}
    first = wire["weeks"][0]
    assert first["weekStart"] == "2025-03-16"
    assert first["weekEnd"] == "2025-03-22"
    assert first["label"] == "Mar 16 - Mar 22, 2025"
    assert first["count"] == 2
    assert first["partitions"][0]["isGroup"] is True
    assert first["partitions"][0]["visitors"][0]["isGroupLeader"] is True


def test_empty_dashboard(visitor_repo, fixed_now):
    view = DashboardService(VisitorService(visitor_repo)).build(now=fixed_now)

    assert view.weeks == ()
    assert (view.stats.total, view.stats.this_week, view.stats.today) == (0, 0, 0)
