from __future__ import annotations

from gradspace.domain.entities.conversation import Conversation
from gradspace.domain.value_objects.ids import ConversationId, UserId
from gradspace.infrastructure.http.schemas.conversation import ConversationSchema


def schema_to_entity(schema: ConversationSchema) -> Conversation:
    return Conversation(
        id=ConversationId(schema.id),
        participant1_id=UserId(schema.participant1_id),
        participant1_full_name=schema.participant1_full_name,
        participant1_profile_img=schema.participant1_profile_img,
        participant2_id=UserId(schema.participant2_id),
        participant2_full_name=schema.participant2_full_name,
        participant2_profile_img=schema.participant2_profile_img,
        last_message=schema.last_message,
        last_message_sender_id=schema.last_message_sender_id,
        last_message_seen=schema.last_message_seen,
        created_at=schema.created_at,
        updated_at=schema.updated_at,
        mock=schema.mock,
    )
