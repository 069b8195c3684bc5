from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Protocol, Sequence, Tuple

from ..common.events import Subscription
from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        role: Role,
        designation: str,
        department: str,
        joining_date: Optional[date],
        contact: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_user(self, user: User) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def list_employees(self) -> Sequence[User]:
        raise NotImplementedError

    def observe_employees(self, callback: Callable[[Sequence[User]], None]) -> Tuple[Sequence[User], Subscription]:
        raise NotImplementedError

    def observe_all(self, callback: Callable[[Sequence[User]], None]) -> Tuple[Sequence[User], Subscription]:
        raise NotImplementedError
