"""Shared test fixtures."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from gradspace.application.dto.principal import Principal
from gradspace.application.exceptions import AppError
from gradspace.domain.entities.conversation import Conversation
from gradspace.domain.entities.message import Message
from gradspace.domain.events.channel_event import ChannelEvent
from gradspace.domain.events.mark_messages_as_seen import MarkMessagesAsSeen
from gradspace.domain.value_objects.enums import UserRole
from gradspace.domain.value_objects.ids import ConversationId, MessageId, UserId

LOCAL_USER = UserId("u1")
PEER_USER = UserId("u2")

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def user_principal() -> Principal:
    return Principal(user_id=LOCAL_USER, username="alice", full_name="Alice A", profile_image="a.png")


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(user_id=UserId("admin"), role=UserRole.ADMIN, username="root")


def make_conversation(
    *,
    conversation_id: str = "c1",
    peer_id: str = PEER_USER,
    last_message: str = "hi",
    last_message_sender_id: str = PEER_USER,
    last_message_seen: bool = False,
    mock: bool = False,
) -> Conversation:
    return Conversation(
        id=ConversationId(conversation_id),
        participant1_id=LOCAL_USER,
        participant1_full_name="Alice A",
        participant1_profile_img="a.png",
        participant2_id=UserId(peer_id),
        participant2_full_name="Bob B",
        participant2_profile_img="b.png",
        last_message=last_message,
        last_message_sender_id=last_message_sender_id,
        last_message_seen=last_message_seen,
        created_at=T0,
        updated_at=T0,
        mock=mock,
    )


def make_message(
    *,
    message_id: str = "m1",
    sender_id: str = PEER_USER,
    text: str = "hello",
    seen: bool = False,
) -> Message:
    return Message(
        id=MessageId(message_id),
        sender_id=UserId(sender_id),
        text=text,
        seen=seen,
        created_at=T0,
    )


def conversation_payload(conversation: Conversation) -> dict[str, Any]:
    return {
        "id": conversation.id,
        "participant1Id": conversation.participant1_id,
        "participant1FullName": conversation.participant1_full_name,
        "participant1ProfileImg": conversation.participant1_profile_img,
        "participant2Id": conversation.participant2_id,
        "participant2FullName": conversation.participant2_full_name,
        "participant2ProfileImg": conversation.participant2_profile_img,
        "lastMessage": conversation.last_message,
        "lastMessageSenderId": conversation.last_message_sender_id,
        "lastMessageSeen": conversation.last_message_seen,
        "createdAt": conversation.created_at.isoformat(),
        "updatedAt": conversation.updated_at.isoformat(),
    }


def message_payload(message: Message, conversation_id: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {
        "id": message.id,
        "senderId": message.sender_id,
        "text": message.text,
        "seen": message.seen,
        "createdAt": message.created_at.isoformat(),
    }
    if conversation_id is not None:
        body["conversationId"] = conversation_id
    return body


Responder = Callable[[dict[str, Any]], Any]


@dataclass
class FakeApi:
    """In-memory ApiClient. Routes map (method, path) to a body, an AppError or a callable."""

    routes: dict[tuple[str, str], Any] = field(default_factory=dict)
    calls: list[tuple[str, str, dict[str, Any]]] = field(default_factory=list)

    def on(self, method: str, path: str, response: Any) -> None:
        self.routes[(method, path)] = response

    def calls_to(self, method: str, path: str) -> list[dict[str, Any]]:
        return [kw for m, p, kw in self.calls if m == method and p == path]

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return self._respond("GET", path, params=params)

    async def post(self, path: str, *, json: Any = None) -> Any:
        return self._respond("POST", path, json=json)

    async def put(self, path: str, *, json: Any = None) -> Any:
        return self._respond("PUT", path, json=json)

    async def patch(self, path: str, *, json: Any = None) -> Any:
        return self._respond("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return self._respond("DELETE", path)

    def _respond(self, method: str, path: str, **kwargs: Any) -> Any:
        self.calls.append((method, path, kwargs))
        response = self.routes.get((method, path), {})
        if isinstance(response, AppError):
            raise response
        if callable(response):
            return response(kwargs)
        return response


@dataclass
class FakeChannel:
    sent: list[MarkMessagesAsSeen] = field(default_factory=list)
    connected: bool = True
    _listeners: list[Callable[[ChannelEvent], None]] = field(default_factory=list)

    def add_listener(self, listener: Callable[[ChannelEvent], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    async def send(self, event: MarkMessagesAsSeen) -> bool:
        if not self.connected:
            return False
        self.sent.append(event)
        return True

    def emit(self, event: ChannelEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


@dataclass
class FixedClock:
    current: datetime = T0

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@dataclass
class FakePreferences:
    values: dict[str, str] = field(default_factory=dict)

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.values[key] = value


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()
