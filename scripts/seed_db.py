"""Load demo accounts, one project and one team into the configured database.

Run after scripts/init_db.py. Safe to run again: accounts are refreshed and
the team/project rows are only inserted when missing.
"""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.lynx_attendance.lynx_attendance.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    # seed.sql looks the accounts up by email
    ensure_demo_users(db_config)
    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")

    print(f"OK: Seeded {db_config.get('database')} on {db_config.get('host')}:{db_config.get('port', 3306)}")
    for email, _, _, role, password in DEMO_USERS:
        print(f"  {role:<10} {email} / {password}")


if __name__ == "__main__":
    main()
