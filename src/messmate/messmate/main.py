from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_CYCLE_DAYS, DEFAULT_MEAL_RATE
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_accounts, list_tables
from .feedback.controller import register as register_feedback
from .menu.controller import register as register_menu
from .payments.controller import register as register_payments
from .qrcodes.controller import register as register_qrcodes
from .requests.controller import register as register_requests
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _setup_logging(level: str) -> None:
    logging.basicConfig(format=LOG_FORMAT, level=getattr(logging, str(level).upper(), logging.INFO))


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_admin_accounts(
            db_config,
            admin_emails=getattr(settings, "ADMIN_EMAILS", []),
            default_password=getattr(settings, "ADMIN_DEFAULT_PASSWORD", ""),
        )
        logger.info("Seed data ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass ``container`` to run against pre-built services (tests); otherwise the
    MySQL-backed container is built from the selected settings module.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_LIFETIME_DAYS", 7)))
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MEAL_RATE"] = int(getattr(settings, "MEAL_RATE", DEFAULT_MEAL_RATE))
    app.config["BILLING_CYCLE_DAYS"] = int(getattr(settings, "BILLING_CYCLE_DAYS", DEFAULT_CYCLE_DAYS))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            meal_rate=app.config["MEAL_RATE"],
            cycle_days=app.config["BILLING_CYCLE_DAYS"],
        )

    register_users(app, container)
    register_menu(app, container)
    register_qrcodes(app, container)
    register_attendance(app, container)
    register_requests(app, container)
    register_feedback(app, container)
    register_payments(app, container)
    register_dashboard(app, container)

    return app
