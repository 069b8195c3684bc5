from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import INVALID_CREDENTIALS_MESSAGE, LOGIN_FAILED_PREFIX
from ..core.enums import Role
from ..core.exceptions import StorageError
from .model import User
from .service import AuthService

logger = logging.getLogger(__name__)

ADMIN_HOME_ROUTE = "admin_dashboard"
EMPLOYEE_HOME_ROUTE = "home"
LOGIN_ROUTE = "login"


def resolve_home_route(role: Role) -> str:
    """Single dispatch point from role to the top-level navigation tree."""

    if role is Role.ADMIN:
        return ADMIN_HOME_ROUTE
    if role is Role.EMPLOYEE:
        return EMPLOYEE_HOME_ROUTE
    raise ValueError(f"Unhandled role: {role!r}")


class AuthSession:
    """Holds at most one authenticated user for the process lifetime.

    LoggedOut --login ok--> LoggedIn(user) --logout--> LoggedOut. A new
    successful login while logged in replaces the identity.
    """

    def __init__(self, auth: AuthService):
        self._auth = auth
        self._current_user: Optional[User] = None
        self._error: Optional[str] = None

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    def login(self, email: str, password: str) -> bool:
        try:
            user = self._auth.find_by_credentials(email, password)
        except StorageError as e:
            logger.exception("Login lookup failed")
            self._error = f"{LOGIN_FAILED_PREFIX}: {e}"
            return False

        if user is None:
            self._error = INVALID_CREDENTIALS_MESSAGE
            return False

        self._current_user = user
        self._error = None
        logger.info("User %s logged in as %s", user.user_id, user.role.value)
        return True

    def logout(self) -> None:
        self._current_user = None

    def clear_error(self) -> None:
        self._error = None

    def refresh(self, user: User) -> None:
        """Swap in a newer copy of the logged-in user after a profile edit."""

        if self._current_user and self._current_user.user_id == user.user_id:
            self._current_user = user

    def home_route(self) -> str:
        if self._current_user is None:
            return LOGIN_ROUTE
        return resolve_home_route(self._current_user.role)
