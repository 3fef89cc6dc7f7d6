from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import clean_text, require_email, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import (
    AlreadyExistsError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from .model import User
from .policy import RolePolicy
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    email: str
    name: str
    role: Role
    landing: str


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, policy: Optional[RolePolicy] = None):
        self._users = users
        self._policy = policy or RolePolicy()

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email(clean_text(email).lower())
        if not user:
            raise AuthenticationError("Invalid e-mail or password")

        try:
            valid = check_password_hash(user.password_hash, "" if password is None else str(password))
        except ValueError:
            # unknown hash method, e.g. a placeholder value
            valid = False

        if not valid:
            raise AuthenticationError("Invalid e-mail or password")

        return SessionUser(
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            role=user.role,
            landing=self._policy.landing_path(user.role),
        )


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository, policy: Optional[RolePolicy] = None):
        self._users = users
        self._policy = policy or RolePolicy()

    def get(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_users(self) -> Sequence[User]:
        return list(self._users.list_all())

    def create_account(
        self,
        *,
        current_role: Role,
        created_by: str,
        email: str,
        password: str,
        name: str,
        role: str = Role.USER.value,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to add users")

        email = require_email(email)
        name = require_non_empty(name, "Name")
        password = require_non_empty(password, "Password")
        require_min_length(password, "Password", 6)

        try:
            role_value = Role(clean_text(role).lower() or Role.USER.value)
        except ValueError:
            raise ValidationError("Role must be 'user' or 'admin'")

        if self._users.get_by_email(email):
            raise AlreadyExistsError("A user with this e-mail already exists")

        user_id = self._users.create_user(
            email=email,
            name=name,
            password_hash=generate_password_hash(password),
            role=role_value,
            created_by=created_by,
        )
        logger.info("User %s created by %s (role=%s)", email, created_by, role_value.value)
        return user_id

    def delete_user(self, *, current_role: Role, user_id: int) -> Sequence[User]:
        """Delete a non-admin user and return the refreshed user list.

        Rows that reference the user (attendance, feedback, payments) are kept.
        """

        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to delete users")

        user = self.get(user_id)
        if not self._policy.can_delete(user):
            raise ValidationError("Cannot delete admin users")

        if not self._users.delete_by_id(user.user_id):
            raise NotFoundError("User not found")

        logger.info("User %s deleted", user.email)
        return self.list_users()
