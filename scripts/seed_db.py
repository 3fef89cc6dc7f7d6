"""Insert the sample weekly menu and make sure the configured admin accounts exist."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.messmate.messmate.database.bootstrap import apply_seed_sql, ensure_admin_accounts


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    changed = ensure_admin_accounts(
        db_config,
        admin_emails=getattr(settings, "ADMIN_EMAILS", []),
        default_password=getattr(settings, "ADMIN_DEFAULT_PASSWORD", ""),
    )

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(admin accounts changed={changed})"
    )


if __name__ == "__main__":
    main()
