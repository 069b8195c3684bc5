from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Generic, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription(Generic[T]):
    """A live query registered on a table.

    Holds the query to re-run and the callback that receives each new snapshot.
    """

    def __init__(self, notifier: "ChangeNotifier", table: str, query: Callable[[], T], callback: Callable[[T], Any]):
        self._notifier = notifier
        self.table = table
        self._query = query
        self._callback = callback
        self.active = True

    def refresh(self) -> None:
        if not self.active:
            return
        snapshot = self._query()
        if self.active:
            self._callback(snapshot)

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._notifier._remove(self)


class ChangeNotifier:
    """Publishes table change notifications to live query subscriptions."""

    def __init__(self):
        self._subs: dict[str, list[Subscription]] = {}
        self._lock = threading.RLock()

    def subscribe(self, table: str, query: Callable[[], T], callback: Callable[[T], Any]) -> Tuple[T, Subscription[T]]:
        snapshot = query()
        sub = Subscription(self, table, query, callback)
        with self._lock:
            self._subs.setdefault(table, []).append(sub)
        return snapshot, sub

    def notify(self, table: str) -> None:
        with self._lock:
            subs = list(self._subs.get(table, ()))
        for sub in subs:
            try:
                sub.refresh()
            except Exception:
                logger.exception("Error refreshing live query on %s", table)

    def subscriber_count(self, table: Optional[str] = None) -> int:
        with self._lock:
            if table is not None:
                return len(self._subs.get(table, ()))
            return sum(len(v) for v in self._subs.values())

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            subs = self._subs.get(sub.table)
            if subs and sub in subs:
                subs.remove(sub)
