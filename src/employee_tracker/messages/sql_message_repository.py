from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Sequence, Tuple

from ..common.datetime_utils import to_datetime
from ..common.events import ChangeNotifier, Subscription
from ..database.base import db_cursor, fetchall, fetchone
from ..database.connection import DatabaseConnection
from .model import Message
from .repository import MessageRepository

TABLE = "messages"
_COLUMNS = "message_id, sender_id, receiver_id, message, sent_at, is_read"


def _to_message(row: dict) -> Message:
    return Message(
        message_id=int(row["message_id"]),
        sender_id=int(row["sender_id"]),
        receiver_id=int(row["receiver_id"]),
        message=row["message"],
        sent_at=to_datetime(row.get("sent_at")),
        is_read=bool(row.get("is_read")),
    )


class SQLMessageRepository(MessageRepository):
    def __init__(self, conn_factory: DatabaseConnection, notifier: ChangeNotifier):
        self._conn_factory = conn_factory
        self._notifier = notifier

    def get_by_id(self, message_id: int) -> Optional[Message]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM messages WHERE message_id=%s", (int(message_id),))
            row = fetchone(cur)
            return _to_message(row) if row else None

    def create_message(self, *, sender_id: int, receiver_id: int, message: str, sent_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO messages(sender_id, receiver_id, message, sent_at, is_read)
                VALUES(%s,%s,%s,%s,0)
                """,
                (int(sender_id), int(receiver_id), message, sent_at),
            )
            new_id = int(cur.lastrowid)
        self._notifier.notify(TABLE)
        return new_id

    def list_all(self) -> Sequence[Message]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM messages ORDER BY sent_at ASC, message_id ASC")
            return [_to_message(r) for r in fetchall(cur)]

    def list_conversation(self, user_a: int, user_b: int) -> Sequence[Message]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM messages
                WHERE (sender_id=%s AND receiver_id=%s) OR (sender_id=%s AND receiver_id=%s)
                ORDER BY sent_at ASC, message_id ASC
                """,
                (int(user_a), int(user_b), int(user_b), int(user_a)),
            )
            return [_to_message(r) for r in fetchall(cur)]

    def count_unread(self, receiver_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM messages WHERE receiver_id=%s AND is_read=0",
                (int(receiver_id),),
            )
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def mark_conversation_read(self, reader_id: int, other_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE messages SET is_read=1 WHERE receiver_id=%s AND sender_id=%s AND is_read=0",
                (int(reader_id), int(other_id)),
            )
            changed = int(cur.rowcount)
        if changed:
            self._notifier.notify(TABLE)
        return changed

    def observe_all(self, callback: Callable[[Sequence[Message]], None]) -> Tuple[Sequence[Message], Subscription]:
        return self._notifier.subscribe(TABLE, self.list_all, callback)

    def observe_conversation(
        self, user_a: int, user_b: int, callback: Callable[[Sequence[Message]], None]
    ) -> Tuple[Sequence[Message], Subscription]:
        return self._notifier.subscribe(TABLE, lambda: self.list_conversation(user_a, user_b), callback)

    def observe_unread_count(self, receiver_id: int, callback: Callable[[int], None]) -> Tuple[int, Subscription]:
        return self._notifier.subscribe(TABLE, lambda: self.count_unread(receiver_id), callback)
