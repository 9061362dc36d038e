from __future__ import annotations

from typing import Iterable

from gradspace.application.dto.principal import Principal
from gradspace.application.ports.api import ApiClient
from gradspace.application.ports.clock import Clock
from gradspace.domain.entities.conversation import Conversation
from gradspace.domain.entities.user import Recipient
from gradspace.domain.value_objects.ids import ConversationId
from gradspace.infrastructure.http.mappers.conversation import schema_to_entity
from gradspace.infrastructure.http.schemas.conversation import ConversationListResponse


async def list_conversations(api: ApiClient) -> list[Conversation]:
    body = await api.get("/messages/conversations")
    response = ConversationListResponse.model_validate(body)
    return [schema_to_entity(c) for c in response.conversations or []]


def find_conversation_with(
    conversations: Iterable[Conversation],
    user_id: str,
) -> Conversation | None:
    for conversation in conversations:
        if conversation.involves(user_id):
            return conversation
    return None


def build_mock_conversation(
    principal: Principal,
    recipient: Recipient,
    clock: Clock,
) -> Conversation:
    """Local placeholder shown until the first message creates the real one."""
    now = clock.now()
    return Conversation(
        id=ConversationId(str(int(now.timestamp() * 1000))),
        participant1_id=principal.user_id,
        participant1_full_name=principal.username,
        participant1_profile_img=principal.profile_image,
        participant2_id=recipient.recipient_id,
        participant2_full_name=recipient.full_name,
        participant2_profile_img=recipient.profile_img,
        last_message="",
        last_message_sender_id="",
        last_message_seen=False,
        created_at=now,
        updated_at=now,
        mock=True,
    )
