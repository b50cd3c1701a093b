"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from typing import List

from message_search.models.message import Attachment, Message, MessageType, User


BASE_TIME = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def alice() -> User:
    return User(id="u_alice", name="Alice", avatar="alice.png")


@pytest.fixture
def bob() -> User:
    return User(id="u_bob", name="Bob")


@pytest.fixture
def carol() -> User:
    return User(id="u_carol", name="Carol")


@pytest.fixture
def make_message(alice):
    """Factory for messages with sensible defaults."""
    def _make(
        id: str,
        content="hello",
        type: MessageType = MessageType.TEXT,
        sender: User = None,
        timestamp: datetime = None,
        chat_id: str = "general",
        chat_name: str = "General",
        attachments=(),
    ) -> Message:
        return Message(
            id=id,
            content=content,
            type=type,
            sender=sender or alice,
            timestamp=timestamp or BASE_TIME,
            chat_id=chat_id,
            chat_name=chat_name,
            attachments=attachments,
        )
    return _make


@pytest.fixture
def sample_messages(make_message, alice, bob, carol) -> List[Message]:
    """A small chat history covering every message type."""
    photo = Attachment(id="a1", name="beach.jpg", type="image/jpeg", url="https://cdn/beach.jpg")
    report = Attachment(id="a2", name="report.pdf", type="application/pdf", url="https://cdn/report.pdf")

    return [
        make_message("m1", "I have a cat", sender=alice, timestamp=BASE_TIME),
        make_message("m2", "Dog is nice", sender=bob, timestamp=BASE_TIME + timedelta(hours=1)),
        make_message("m3", None, MessageType.IMAGE, sender=alice,
                     timestamp=BASE_TIME + timedelta(hours=2), chat_id="photos",
                     chat_name="Photos", attachments=(photo,)),
        make_message("m4", None, MessageType.VIDEO, sender=carol,
                     timestamp=BASE_TIME + timedelta(hours=3), chat_id="photos", chat_name="Photos"),
        make_message("m5", None, MessageType.VOICE, sender=bob,
                     timestamp=BASE_TIME + timedelta(hours=4)),
        make_message("m6", "Quarterly report attached", MessageType.FILE, sender=carol,
                     timestamp=BASE_TIME + timedelta(hours=5), attachments=(report,)),
        make_message("m7", "See https://example.com for cat pictures, Cat lovers",
                     sender=bob, timestamp=BASE_TIME + timedelta(hours=6)),
        make_message("m8", "Alice joined the chat", MessageType.SYSTEM, sender=alice,
                     timestamp=BASE_TIME + timedelta(hours=7)),
    ]


@pytest.fixture
def message_records() -> List[dict]:
    """Raw message records as a host would decode them from JSON."""
    return [
        {
            "id": "r1",
            "content": "Lunch at noon?",
            "type": "text",
            "sender": {"id": "u_alice", "name": "Alice"},
            "timestamp": "2024-01-15T09:00:00+00:00",
            "chat_id": "general",
            "chat_name": "General",
        },
        {
            "id": "r2",
            "content": "Sure, lunch sounds good. Noon works",
            "type": "text",
            "sender": {"id": "u_bob", "name": "Bob"},
            "timestamp": "2024-01-15T09:05:00+00:00",
            "chat_id": "general",
            "chat_name": "General",
        },
        {
            "id": "r3",
            "content": None,
            "type": "image",
            "sender": {"id": "u_alice", "name": "Alice"},
            "timestamp": "2024-01-15T09:10:00+00:00",
            "chat_id": "general",
            "chat_name": "General",
            "attachments": [
                {"id": "a1", "name": "menu.png", "type": "image/png", "url": "https://cdn/menu.png"}
            ],
        },
    ]
