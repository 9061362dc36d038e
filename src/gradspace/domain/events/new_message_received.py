from __future__ import annotations

from dataclasses import dataclass

from gradspace.domain.entities.message import Message
from gradspace.domain.value_objects.ids import ConversationId


@dataclass(frozen=True, slots=True)
class NewMessageReceived:
    conversation_id: ConversationId
    message: Message
