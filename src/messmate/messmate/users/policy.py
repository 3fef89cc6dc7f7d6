from __future__ import annotations

from ..core.enums import Role
from .model import User

ADMIN_LANDING = "/admin"
USER_LANDING = "/dashboard"


class RolePolicy:
    """Single place that decides admin capability, from the role stored on the user record."""

    def is_admin(self, user: User) -> bool:
        return user.role == Role.ADMIN

    def can_delete(self, user: User) -> bool:
        return not self.is_admin(user)

    def landing_path(self, role: Role) -> str:
        return ADMIN_LANDING if role == Role.ADMIN else USER_LANDING
