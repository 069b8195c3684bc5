from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object; holds no database access code.
    """

    user_id: int
    email: str
    password_hash: str
    name: str
    role: Role
    designation: str
    department: str
    joining_date: Optional[date]
    contact: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def public_dict(self) -> dict:
        """Serializable view without the credential hash."""

        return {
            "user_id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "designation": self.designation,
            "department": self.department,
            "joining_date": self.joining_date.isoformat() if self.joining_date else None,
            "contact": self.contact,
        }
