from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: user account.

    Plain data object, no DB access code here.
    """

    user_id: int
    email: str
    name: str
    password_hash: str
    role: Role
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_public(self) -> dict:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
