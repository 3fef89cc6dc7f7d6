from __future__ import annotations

from dataclasses import dataclass

from flask import session

from ..core.enums import Role


@dataclass(frozen=True)
class Actor:
    """Identity of the signed-in caller, read from the Flask session."""

    user_id: int
    email: str
    name: str
    role: Role


def current_actor() -> Actor:
    return Actor(
        user_id=int(session["user_id"]),
        email=session.get("email", ""),
        name=session.get("name", ""),
        role=Role(session.get("role", Role.USER.value)),
    )
