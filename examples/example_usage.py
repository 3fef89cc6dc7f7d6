"""Example: use the service layer directly (no Flask).

Controllers stay thin; the business rules live in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.messmate.messmate.common.datetime_utils import now_local
from src.messmate.messmate.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        meal_rate=settings.MEAL_RATE,
        cycle_days=settings.BILLING_CYCLE_DAYS,
    )
    today = now_local().date()
    print([item.to_dict() for item in container.menu_service.menu_for(today)])
    print(container.dashboard_service.admin_stats(today=today).to_dict())


if __name__ == "__main__":
    main()
