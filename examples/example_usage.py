"""Example: use the service layer directly (no Flask).

Prints this week's arrivals grouped into travel parties.
"""

from config import load_settings

from src.protocol_desk.protocol_desk.container import build_container


def main():
    settings = load_settings()
    container = build_container(
        db_config=settings.DB_CONFIG,
        secret_key=settings.SECRET_KEY,
        app_url=settings.APP_URL,
    )
    view = container.dashboard_service.build()
    print(f"total={view.stats.total} this_week={view.stats.this_week} today={view.stats.today}")
    for week in view.weeks[:1]:
        print(week.label)
        for part in week.partitions:
            names = ", ".join(v.name for v in part.members)
            print(f"  {'group' if part.is_group else 'solo '}: {names}")


if __name__ == "__main__":
    main()
