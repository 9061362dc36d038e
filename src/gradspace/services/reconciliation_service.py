"""Pure list transforms applied when messages are sent, received or read.

Every function returns a new tuple and leaves entries it does not target
as the very same objects, in the same order.
"""
from __future__ import annotations

import dataclasses
from typing import Sequence

from gradspace.domain.entities.conversation import Conversation
from gradspace.domain.entities.message import Message


def patch_preview(
    conversations: Sequence[Conversation],
    conversation_id: str,
    *,
    text: str,
    sender_id: str,
    seen: bool,
) -> tuple[Conversation, ...]:
    return tuple(
        dataclasses.replace(
            c,
            last_message=text,
            last_message_sender_id=sender_id,
            last_message_seen=seen,
        )
        if c.id == conversation_id
        else c
        for c in conversations
    )


def mark_conversation_seen(
    conversations: Sequence[Conversation],
    conversation_id: str,
) -> tuple[Conversation, ...]:
    return tuple(
        dataclasses.replace(c, last_message_seen=True)
        if c.id == conversation_id and not c.last_message_seen
        else c
        for c in conversations
    )


def append_message(messages: Sequence[Message], message: Message) -> tuple[Message, ...]:
    # Redelivered frames and the echo of our own sends carry a known id.
    if any(m.id == message.id for m in messages):
        return tuple(messages)
    return (*messages, message)


def mark_all_seen(messages: Sequence[Message]) -> tuple[Message, ...]:
    return tuple(m if m.seen else dataclasses.replace(m, seen=True) for m in messages)


def materialize(
    conversations: Sequence[Conversation],
    placeholder_id: str,
    server_id: str,
) -> tuple[Conversation, ...]:
    """Swap a mock conversation's local id for the one the backend assigned."""
    return tuple(
        dataclasses.replace(c, id=server_id, mock=False)
        if c.id == placeholder_id and c.mock
        else c
        for c in conversations
    )


def needs_acknowledgement(messages: Sequence[Message], local_user_id: str) -> bool:
    return bool(messages) and messages[-1].sender_id != local_user_id
