from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Protocol, Sequence, Tuple

from ..common.events import Subscription
from .model import Message


class MessageRepository(Protocol):
    def get_by_id(self, message_id: int) -> Optional[Message]:
        raise NotImplementedError

    def create_message(self, *, sender_id: int, receiver_id: int, message: str, sent_at: datetime) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[Message]:
        raise NotImplementedError

    def list_conversation(self, user_a: int, user_b: int) -> Sequence[Message]:
        """Messages exchanged between two users, oldest first."""

        raise NotImplementedError

    def count_unread(self, receiver_id: int) -> int:
        raise NotImplementedError

    def mark_conversation_read(self, reader_id: int, other_id: int) -> int:
        """Flag messages sent by ``other_id`` to ``reader_id`` as read. Returns rows changed."""

        raise NotImplementedError

    def observe_all(self, callback: Callable[[Sequence[Message]], None]) -> Tuple[Sequence[Message], Subscription]:
        raise NotImplementedError

    def observe_conversation(
        self, user_a: int, user_b: int, callback: Callable[[Sequence[Message]], None]
    ) -> Tuple[Sequence[Message], Subscription]:
        raise NotImplementedError

    def observe_unread_count(
        self, receiver_id: int, callback: Callable[[int], None]
    ) -> Tuple[int, Subscription]:
        raise NotImplementedError
