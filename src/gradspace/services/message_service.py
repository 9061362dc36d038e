from __future__ import annotations

from gradspace.application.exceptions import ValidationError
from gradspace.application.ports.api import ApiClient
from gradspace.domain.entities.message import Message
from gradspace.domain.value_objects.ids import ConversationId
from gradspace.infrastructure.http.mappers.message import schema_to_entity
from gradspace.infrastructure.http.schemas.message import (
    MessageListResponse,
    MessageSchema,
    SendMessageRequest,
)


async def list_messages(peer_id: str, api: ApiClient) -> list[Message]:
    """Message history with one peer, oldest first."""
    body = await api.get(f"/messages/{peer_id}")
    response = MessageListResponse.model_validate(body)
    return [schema_to_entity(m) for m in response.messages or []]


async def post_message(
    text: str,
    recipient_id: str,
    api: ApiClient,
) -> tuple[Message, ConversationId | None]:
    """Send a message.

    Returns (message, conversation_id). The conversation id is None when the
    backend does not echo it.
    """
    if not text.strip():
        raise ValidationError("Message text is empty")

    request = SendMessageRequest(content=text, recipient_id=recipient_id)
    body = await api.post("/messages", json=request.model_dump(by_alias=True))
    schema = MessageSchema.model_validate(body)
    conversation_id = ConversationId(schema.conversation_id) if schema.conversation_id else None
    return schema_to_entity(schema), conversation_id
