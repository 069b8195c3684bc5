from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Message:
    """Domain entity: a direct message between two users."""

    message_id: int
    sender_id: int
    receiver_id: int
    message: str
    sent_at: Optional[datetime]
    is_read: bool = False

    def to_dict(self) -> dict:
        return {
            "message_id": self.message_id,
            "sender_id": self.sender_id,
            "receiver_id": self.receiver_id,
            "message": self.message,
            "timestamp": self.sent_at.isoformat(timespec="seconds") if self.sent_at else None,
            "is_read": self.is_read,
        }
