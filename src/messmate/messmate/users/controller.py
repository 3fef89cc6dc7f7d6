from __future__ import annotations

import logging

from flask import Flask, session

from ..common.decorators import admin_required, login_required
from ..common.responses import domain_error, fail, json_body, ok
from ..common.session import current_actor
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="landing")
    def landing():
        """Tell the front-end where an authenticated visitor belongs."""

        if "user_id" not in session:
            return ok(authenticated=False, redirect="/login")
        role = Role(session.get("role", Role.USER.value))
        return ok(authenticated=True, redirect=container.role_policy.landing_path(role))

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Login failed")
            return fail("Login failed", 500)

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        session["user_id"] = s_user.user_id
        session["email"] = s_user.email
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return ok(
            message="Signed in",
            user={"user_id": s_user.user_id, "email": s_user.email, "name": s_user.name, "role": s_user.role.value},
            redirect=s_user.landing,
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Logged out successfully")

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        actor = current_actor()
        return ok(user={"user_id": actor.user_id, "email": actor.email, "name": actor.name, "role": actor.role.value})

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        try:
            users = container.user_service.list_users()
        except Exception:
            logger.exception("Failed to load users")
            return fail("Failed to load users", 500)
        return ok(users=[u.to_public() for u in users])

    @app.route("/api/admin/users", methods=["POST"], endpoint="add_user")
    @admin_required
    def add_user():
        data = json_body()
        actor = current_actor()
        try:
            user_id = container.user_service.create_account(
                current_role=actor.role,
                created_by=actor.email,
                email=data.get("email", ""),
                password=data.get("password", ""),
                name=data.get("name", ""),
                role=data.get("role") or Role.USER.value,
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to add user")
            return fail("Failed to add user", 500)
        return ok(201, message="New user has been created successfully", user_id=user_id)

    @app.route("/api/admin/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        try:
            users = container.user_service.delete_user(current_role=current_actor().role, user_id=user_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Failed to delete user %s", user_id)
            return fail("Failed to delete user", 500)
        return ok(message="User has been deleted successfully", users=[u.to_public() for u in users])
