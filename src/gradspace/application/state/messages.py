from __future__ import annotations

from dataclasses import dataclass

from gradspace.application.state.store import Store
from gradspace.domain.entities.message import Message
from gradspace.domain.value_objects.ids import ConversationId


@dataclass(frozen=True, slots=True)
class MessageListState:
    conversation_id: ConversationId | None = None
    messages: tuple[Message, ...] = ()
    is_loading: bool = False
    is_sending: bool = False
    error: str | None = None


class MessageListStore(Store[MessageListState]):
    """Messages of the open conversation, oldest first."""

    def __init__(self) -> None:
        super().__init__(MessageListState())

    def reset(self, conversation_id: ConversationId | None) -> None:
        self.set(MessageListState(conversation_id=conversation_id))
