from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import to_date, today_local
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import ALL_DEPARTMENTS, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import User
from .repository import UserRepository


class AuthService:
    """Use case: look up a user by credentials (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def find_by_credentials(self, email: str, password: str) -> Optional[User]:
        """Return the user whose email and password both match, else None."""

        user = self._users.get_by_email(email or "")
        if not user:
            return None

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        return user if ok else None


class UserService:
    """Use case: manage employee accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def add_employee(
        self,
        *,
        name: str,
        email: str,
        password: str,
        designation: str = "",
        department: str = "",
        joining_date: date | str | None = None,
        contact: Optional[str] = None,
        role: Role = Role.EMPLOYEE,
    ) -> int:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        joined = to_date(joining_date) if joining_date else today_local()
        if joined is None:
            raise ValidationError("Joining date must be YYYY-MM-DD")

        return self._users.create_user(
            email=email,
            password_hash=generate_password_hash(password),
            name=name,
            role=Role(role),
            designation=(designation or "").strip(),
            department=(department or "").strip(),
            joining_date=joined,
            contact=(contact or "").strip() or None,
        )

    def update_employee(
        self,
        user_id: int,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
        designation: Optional[str] = None,
        department: Optional[str] = None,
        joining_date: date | str | None = None,
        contact: Optional[str] = None,
    ) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Employee does not exist")

        changes: dict = {}
        if name is not None:
            changes["name"] = require_non_empty(name, "Name")
        if email is not None and email.strip() != user.email:
            email = require_email(email)
            other = self._users.get_by_email(email)
            if other and other.user_id != user.user_id:
                raise ValidationError("Email is already registered")
            changes["email"] = email
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            changes["password_hash"] = generate_password_hash(password)
        if designation is not None:
            changes["designation"] = designation.strip()
        if department is not None:
            changes["department"] = department.strip()
        if joining_date is not None:
            joined = to_date(joining_date)
            if joined is None:
                raise ValidationError("Joining date must be YYYY-MM-DD")
            changes["joining_date"] = joined
        if contact is not None:
            changes["contact"] = contact.strip() or None

        updated = replace(user, **changes)
        if changes and not self._users.update_user(updated):
            raise ValidationError("Updating employee failed")
        return updated

    def delete_employee(self, *, current_role: Role, user_id: int) -> None:
        """Delete an employee. Their tasks, reviews and messages are kept."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Employee does not exist")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")

        if not self._users.delete_by_id(user_id):
            raise ValidationError("Deleting employee failed")

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def list_employees(self) -> Sequence[User]:
        return self._users.list_employees()

    def employee_count(self) -> int:
        return len(self._users.list_employees())

    def list_departments(self) -> list[str]:
        return sorted({u.department for u in self._users.list_employees() if u.department})

    def search_employees(self, query: str = "", department: Optional[str] = None) -> list[User]:
        """Case-insensitive match on name or designation, optionally within a department."""

        needle = (query or "").strip().lower()
        out = []
        for u in self._users.list_employees():
            if needle and needle not in u.name.lower() and needle not in u.designation.lower():
                continue
            if department and department != ALL_DEPARTMENTS and u.department != department:
                continue
            out.append(u)
        return out
