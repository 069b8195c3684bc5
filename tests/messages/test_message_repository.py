from __future__ import annotations

from datetime import datetime

import pytest

from employee_tracker.core.exceptions import ValidationError


@pytest.fixture
def people(container):
    admin = container.users_repo.get_by_email("admin@company.com").user_id
    svc = container.user_service
    manoj = svc.add_employee(name="Manoj", email="manoj@company.com", password="pass123")
    krish = svc.add_employee(name="Krish", email="krish@company.com", password="pass123")
    return admin, manoj, krish


def send(container, sender: int, receiver: int, text: str, minute: int) -> int:
    return container.message_service.send_message(
        sender_id=sender, receiver_id=receiver, text=text, now=datetime(2026, 2, 1, 10, minute, 30, 123456)
    )


def test_conversation_is_ascending_and_symmetric(container, people):
    admin, manoj, _ = people
    send(container, admin, manoj, "Hi Manoj", 1)
    send(container, manoj, admin, "Hello", 2)
    send(container, admin, manoj, "Status?", 3)

    convo = container.message_service.conversation(admin, manoj)

    assert [m.message for m in convo] == ["Hi Manoj", "Hello", "Status?"]
    assert [m.message for m in container.message_service.conversation(manoj, admin)] == [m.message for m in convo]
    assert convo[0].sent_at == datetime(2026, 2, 1, 10, 1, 30)


def test_unread_count_and_mark_read_only_touch_one_conversation(container, people):
    admin, manoj, krish = people
    send(container, admin, manoj, "one", 1)
    send(container, admin, manoj, "two", 2)
    send(container, krish, manoj, "three", 3)
    send(container, manoj, admin, "reply", 4)

    assert container.message_service.unread_count(manoj) == 3

    changed = container.message_service.mark_conversation_read(manoj, admin)

    assert changed == 2
    assert container.message_service.unread_count(manoj) == 1
    assert container.message_service.unread_count(admin) == 1
    assert container.message_service.mark_conversation_read(manoj, admin) == 0


def test_open_conversation_marks_incoming_read(container, people):
    admin, manoj, _ = people
    send(container, admin, manoj, "ping", 1)

    convo = container.message_service.open_conversation(manoj, admin)

    assert [m.is_read for m in convo] == [True]
    assert container.message_service.unread_count(manoj) == 0


def test_send_message_validation(container, people):
    admin, manoj, _ = people
    svc = container.message_service
    with pytest.raises(ValidationError):
        svc.send_message(sender_id=admin, receiver_id=manoj, text="   ")
    with pytest.raises(ValidationError):
        svc.send_message(sender_id=admin, receiver_id=admin, text="note to self")
    with pytest.raises(ValidationError):
        svc.send_message(sender_id=admin, receiver_id=999, text="hello?")


def test_send_message_trims_text(container, people):
    admin, manoj, _ = people
    message_id = send(container, admin, manoj, "  hello  ", 1)

    assert container.messages_repo.get_by_id(message_id).message == "hello"


def test_unread_observer_sees_new_messages(container, people):
    admin, manoj, _ = people
    seen = []
    initial, sub = container.messages_repo.observe_unread_count(manoj, seen.append)

    send(container, admin, manoj, "one", 1)
    container.message_service.mark_conversation_read(manoj, admin)
    sub.unsubscribe()
    send(container, admin, manoj, "two", 2)

    assert initial == 0
    assert seen == [1, 0]


def test_list_all_and_observe_all(container, people):
    admin, manoj, krish = people
    seen = []
    initial, sub = container.messages_repo.observe_all(seen.append)

    send(container, admin, manoj, "one", 1)
    send(container, krish, admin, "two", 2)
    sub.unsubscribe()

    assert initial == []
    assert [[m.message for m in snap] for snap in seen] == [["one"], ["one", "two"]]
    assert len(container.messages_repo.list_all()) == 2
