"""Websocket frame models and their mapping onto channel events."""
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from gradspace.domain.entities.message import Message
from gradspace.domain.events.channel_event import ChannelEvent
from gradspace.domain.events.mark_messages_as_seen import MarkMessagesAsSeen
from gradspace.domain.events.messages_seen import MessagesSeen
from gradspace.domain.events.new_message_received import NewMessageReceived
from gradspace.domain.events.online_users_changed import OnlineUsersChanged
from gradspace.domain.events.unknown_event import UnknownEvent
from gradspace.domain.value_objects.enums import ChannelEventType
from gradspace.domain.value_objects.ids import ConversationId, MessageId, UserId

logger = logging.getLogger(__name__)


class IncomingMessage(BaseModel):
    id: str
    conversation_id: str = Field(alias="conversationId")
    sender_id: str = Field(alias="senderId")
    text: str
    seen: bool = False
    created_at: datetime = Field(alias="createdAt")


class NewMessageFrame(BaseModel):
    """Server → Client."""

    type: Literal["NEW_MESSAGE"]
    message: IncomingMessage


class MessagesSeenFrame(BaseModel):
    """Server → Client."""

    type: Literal["MESSAGES_SEEN"]
    conversation_id: str = Field(alias="conversationId")


class OnlineUsersFrame(BaseModel):
    """Server → Client."""

    type: Literal["ONLINE_USERS"]
    users: list[str] = []


class MarkSeenPayload(BaseModel):
    conversation_id: str = Field(alias="conversationId")
    user_id: str = Field(alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class MarkMessagesAsSeenFrame(BaseModel):
    """Client → Server."""

    type: Literal["MARK_MESSAGES_AS_SEEN"] = "MARK_MESSAGES_AS_SEEN"
    payload: MarkSeenPayload


InboundFrame = Annotated[
    Union[NewMessageFrame, MessagesSeenFrame, OnlineUsersFrame],
    Field(discriminator="type"),
]

_inbound_adapter: TypeAdapter[Any] = TypeAdapter(InboundFrame)

_KNOWN_INBOUND = {
    ChannelEventType.NEW_MESSAGE,
    ChannelEventType.MESSAGES_SEEN,
    ChannelEventType.ONLINE_USERS,
}


def decode_frame(raw: str | bytes) -> ChannelEvent | None:
    """Decode one inbound frame.

    Returns None for frames that cannot be understood at all (bad JSON, no
    ``type``, a known type with an invalid body). Unrecognised types come
    back as ``UnknownEvent`` so callers can still see them.
    """
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Dropping frame that is not JSON")
        return None

    frame_type = data.get("type") if isinstance(data, dict) else None
    if not isinstance(frame_type, str) or not frame_type:
        logger.warning("Unstructured frame: %r", data)
        return None

    if frame_type not in _KNOWN_INBOUND:
        return UnknownEvent(type=frame_type, data=data)

    try:
        frame = _inbound_adapter.validate_python(data)
    except PydanticValidationError:
        logger.exception("Invalid %s frame", frame_type)
        return None

    return _frame_to_event(frame)


def encode_mark_seen(event: MarkMessagesAsSeen) -> str:
    frame = MarkMessagesAsSeenFrame(
        payload=MarkSeenPayload(conversation_id=event.conversation_id, user_id=event.user_id),
    )
    return frame.model_dump_json(by_alias=True)


def _frame_to_event(frame: NewMessageFrame | MessagesSeenFrame | OnlineUsersFrame) -> ChannelEvent:
    if isinstance(frame, NewMessageFrame):
        incoming = frame.message
        return NewMessageReceived(
            conversation_id=ConversationId(incoming.conversation_id),
            message=Message(
                id=MessageId(incoming.id),
                sender_id=UserId(incoming.sender_id),
                text=incoming.text,
                seen=incoming.seen,
                created_at=incoming.created_at,
            ),
        )
    if isinstance(frame, MessagesSeenFrame):
        return MessagesSeen(conversation_id=ConversationId(frame.conversation_id))
    return OnlineUsersChanged(user_ids=frozenset(UserId(u) for u in frame.users))
