from __future__ import annotations

from gradspace.domain.entities.message import Message
from gradspace.domain.value_objects.ids import MessageId, UserId
from gradspace.infrastructure.http.schemas.message import MessageSchema


def schema_to_entity(schema: MessageSchema) -> Message:
    return Message(
        id=MessageId(schema.id),
        sender_id=UserId(schema.sender_id),
        text=schema.text,
        seen=schema.seen,
        created_at=schema.created_at,
    )
