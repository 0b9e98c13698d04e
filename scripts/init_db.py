"""Create the Protocol Desk tables.

    python scripts/init_db.py           # schema only
    python scripts/init_db.py --seed    # schema, department row and demo accounts
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import load_settings

from src.protocol_desk.protocol_desk.database.bootstrap import (
    apply_schema,
    apply_seed_sql,
    ensure_demo_accounts,
    list_tables,
)

EXPECTED_TABLES = {"users", "departments", "department_members", "visitors", "visitor_photos"}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="also insert the department and demo accounts")
    args = parser.parse_args(argv)

    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    missing = EXPECTED_TABLES - set(list_tables(db_config))
    if missing:
        print(f"ERROR: {target} is missing tables: {', '.join(sorted(missing))}")
        return 1
    print(f"OK: schema ready on {target}")

    if args.seed:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_accounts(db_config, department_name=settings.DEPARTMENT_NAME)
        print(f"OK: seeded {settings.DEPARTMENT_NAME} and demo accounts (see scripts/seed_db.py)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
