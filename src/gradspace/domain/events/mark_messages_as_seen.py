from __future__ import annotations

from dataclasses import dataclass

from gradspace.domain.value_objects.ids import ConversationId, UserId


@dataclass(frozen=True, slots=True)
class MarkMessagesAsSeen:
    """Outbound acknowledgement: the local user has read the conversation."""

    conversation_id: ConversationId
    user_id: UserId
