from __future__ import annotations

from dataclasses import dataclass

from gradspace.domain.value_objects.ids import ConversationId


@dataclass(frozen=True, slots=True)
class MessagesSeen:
    conversation_id: ConversationId
