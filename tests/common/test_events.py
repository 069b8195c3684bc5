from __future__ import annotations

import logging

from employee_tracker.common.events import ChangeNotifier


class Counter:
    def __init__(self):
        self.value = 0

    def read(self) -> int:
        return self.value


def test_subscribe_returns_initial_snapshot():
    notifier = ChangeNotifier()
    counter = Counter()
    counter.value = 4

    snapshot, sub = notifier.subscribe("tasks", counter.read, lambda v: None)

    assert snapshot == 4
    assert sub.active
    assert notifier.subscriber_count("tasks") == 1


def test_notify_redelivers_only_for_matching_table():
    notifier = ChangeNotifier()
    counter = Counter()
    seen = []
    notifier.subscribe("tasks", counter.read, seen.append)

    counter.value = 1
    notifier.notify("tasks")
    counter.value = 2
    notifier.notify("reviews")

    assert seen == [1]


def test_unsubscribe_is_idempotent_and_final():
    notifier = ChangeNotifier()
    seen = []
    _, sub = notifier.subscribe("messages", lambda: "x", seen.append)

    sub.unsubscribe()
    sub.unsubscribe()
    notifier.notify("messages")

    assert seen == []
    assert not sub.active
    assert notifier.subscriber_count() == 0


def test_failing_callback_does_not_block_others(caplog):
    notifier = ChangeNotifier()
    seen = []

    def boom(_):
        raise RuntimeError("listener broke")

    notifier.subscribe("users", lambda: 1, boom)
    notifier.subscribe("users", lambda: 2, seen.append)

    with caplog.at_level(logging.ERROR):
        notifier.notify("users")

    assert seen == [2]
    assert "Error refreshing live query on users" in caplog.text


def test_callback_may_unsubscribe_during_delivery():
    notifier = ChangeNotifier()
    seen = []
    subs = {}

    def once(value):
        seen.append(value)
        subs["a"].unsubscribe()

    _, subs["a"] = notifier.subscribe("tasks", lambda: "a", once)
    notifier.notify("tasks")
    notifier.notify("tasks")

    assert seen == ["a"]
