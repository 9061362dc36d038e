from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from gradspace.application.exceptions import AppError
from gradspace.application.ports.api import ApiClient
from gradspace.application.state.store import Store
from gradspace.domain.entities.conversation import Conversation
from gradspace.services import conversation_service

logger = logging.getLogger(__name__)

ConversationsUpdater = Callable[[tuple[Conversation, ...]], Sequence[Conversation]]


@dataclass(frozen=True, slots=True)
class ConversationState:
    conversations: tuple[Conversation, ...] = ()
    selected: Conversation | None = None
    is_loading: bool = False
    error: str | None = None


class ConversationStore(Store[ConversationState]):
    """Conversation summaries plus the one that is open."""

    def __init__(self) -> None:
        super().__init__(ConversationState())

    async def fetch_conversations(self, api: ApiClient) -> None:
        self.patch(is_loading=True, error=None)
        try:
            conversations = await conversation_service.list_conversations(api)
        except AppError as exc:
            logger.warning("Fetching conversations failed: %s", exc.detail)
            self.patch(is_loading=False, error=exc.detail or "Failed to fetch conversations")
            return
        self.patch(conversations=tuple(conversations), is_loading=False)

    def set_selected_conversation(self, conversation: Conversation | None) -> None:
        self.patch(selected=conversation)

    def set_conversations(self, updater: Sequence[Conversation] | ConversationsUpdater) -> None:
        if callable(updater):
            conversations = tuple(updater(self.state.conversations))
        else:
            conversations = tuple(updater)
        self.patch(conversations=conversations)

    def find_by_id(self, conversation_id: str) -> Conversation | None:
        for conversation in self.state.conversations:
            if conversation.id == conversation_id:
                return conversation
        return None

    def find_with_user(self, user_id: str) -> Conversation | None:
        return conversation_service.find_conversation_with(self.state.conversations, user_id)
