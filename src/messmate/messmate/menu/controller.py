from __future__ import annotations

import logging

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.decorators import admin_required, login_required
from ..common.responses import domain_error, fail, json_body, ok
from ..common.session import current_actor
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/menu", methods=["GET"], endpoint="weekly_menu")
    @login_required
    def weekly_menu():
        try:
            items = container.menu_service.weekly_menu()
        except Exception:
            logger.exception("Failed to load menu")
            return fail("Failed to load menu", 500)
        return ok(menu=[i.to_dict() for i in items])

    @app.route("/api/menu/today", methods=["GET"], endpoint="todays_menu")
    @login_required
    def todays_menu():
        try:
            items = container.menu_service.menu_for(now_local().date())
        except Exception:
            logger.exception("Failed to load today's menu")
            return fail("Failed to load menu", 500)
        return ok(menu=[i.to_dict() for i in items])

    @app.route("/api/admin/menu", methods=["POST"], endpoint="add_menu_item")
    @admin_required
    def add_menu_item():
        data = json_body()
        actor = current_actor()
        try:
            item_id = container.menu_service.add_item(
                current_role=actor.role,
                created_by=actor.email,
                day=data.get("day", ""),
                meal_type=data.get("meal_type", ""),
                items=data.get("items", ""),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to add menu item")
            return fail("Failed to add menu item", 500)
        return ok(201, message="New menu item has been added successfully", item_id=item_id)

    @app.route("/api/admin/menu/<int:item_id>", methods=["PUT"], endpoint="update_menu_item")
    @admin_required
    def update_menu_item(item_id: int):
        data = json_body()
        try:
            container.menu_service.update_item(
                current_role=current_actor().role,
                item_id=item_id,
                day=data.get("day", ""),
                meal_type=data.get("meal_type", ""),
                items=data.get("items", ""),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to update menu item %s", item_id)
            return fail("Failed to update menu item", 500)
        return ok(message="Menu item has been updated successfully")

    @app.route("/api/admin/menu/<int:item_id>", methods=["DELETE"], endpoint="delete_menu_item")
    @admin_required
    def delete_menu_item(item_id: int):
        try:
            container.menu_service.delete_item(current_role=current_actor().role, item_id=item_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to delete menu item %s", item_id)
            return fail("Failed to delete menu item", 500)
        return ok(message="Menu item has been deleted successfully")
