from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .model import Message
from .repository import MessageRepository


class MessageService:
    """Use case: direct messages between two users."""

    def __init__(self, messages: MessageRepository, users: UserRepository):
        self._messages = messages
        self._users = users

    def send_message(self, *, sender_id: int, receiver_id: int, text: str, now: Optional[datetime] = None) -> int:
        body = (text or "").strip()
        if not body:
            raise ValidationError("Message cannot be empty")
        if int(sender_id) == int(receiver_id):
            raise ValidationError("Cannot send a message to yourself")
        if not self._users.get_by_id(receiver_id):
            raise ValidationError("Recipient does not exist")

        return self._messages.create_message(
            sender_id=int(sender_id),
            receiver_id=int(receiver_id),
            message=body,
            sent_at=(now or now_local()).replace(microsecond=0),
        )

    def conversation(self, user_id: int, other_id: int) -> Sequence[Message]:
        return self._messages.list_conversation(user_id, other_id)

    def unread_count(self, user_id: int) -> int:
        return self._messages.count_unread(user_id)

    def mark_conversation_read(self, user_id: int, other_id: int) -> int:
        return self._messages.mark_conversation_read(user_id, other_id)

    def open_conversation(self, user_id: int, other_id: int) -> Sequence[Message]:
        """Load a conversation and mark the incoming side as read."""

        self._messages.mark_conversation_read(user_id, other_id)
        return self._messages.list_conversation(user_id, other_id)
