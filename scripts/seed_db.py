from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import load_settings

from src.protocol_desk.protocol_desk.database.bootstrap import DEMO_ACCOUNTS, apply_seed_sql, ensure_demo_accounts


def main() -> None:
    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)
    department_name = getattr(settings, "DEPARTMENT_NAME", "Protocol Department")

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_accounts(db_config, department_name=department_name)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )
    for name, email, password, is_admin in DEMO_ACCOUNTS:
        print(f"  {email} / {password} ({'admin' if is_admin else 'member'})")


if __name__ == "__main__":
    main()
