"""Chat flows of the local user: open, send, start new chats, react to the channel."""
from __future__ import annotations

import asyncio
import dataclasses
import logging

from gradspace.application.dto.principal import Principal
from gradspace.application.exceptions import AppError, ValidationError
from gradspace.application.ports.api import ApiClient
from gradspace.application.ports.channel import Channel
from gradspace.application.ports.clock import Clock, SystemClock
from gradspace.application.state.conversations import ConversationStore
from gradspace.application.state.messages import MessageListStore
from gradspace.application.state.presence import PresenceStore
from gradspace.domain.entities.conversation import Conversation
from gradspace.domain.entities.message import Message
from gradspace.domain.entities.user import Recipient
from gradspace.domain.events.channel_event import ChannelEvent
from gradspace.domain.events.mark_messages_as_seen import MarkMessagesAsSeen
from gradspace.domain.events.messages_seen import MessagesSeen
from gradspace.domain.events.new_message_received import NewMessageReceived
from gradspace.domain.events.online_users_changed import OnlineUsersChanged
from gradspace.services import conversation_service, message_service, reconciliation_service

logger = logging.getLogger(__name__)


class ChatSession:
    """Ties the conversation, message and presence stores to the API and channel.

    ``handle_event`` is registered as a channel listener. It runs
    synchronously; acknowledgements it triggers are scheduled as tasks and
    can be awaited with ``drain``.
    """

    def __init__(
        self,
        principal: Principal,
        api: ApiClient,
        channel: Channel,
        *,
        clock: Clock | None = None,
        conversations: ConversationStore | None = None,
        messages: MessageListStore | None = None,
        presence: PresenceStore | None = None,
    ) -> None:
        self.principal = principal
        self._api = api
        self._channel = channel
        self._clock = clock or SystemClock()
        self.conversations = conversations or ConversationStore()
        self.messages = messages or MessageListStore()
        self.presence = presence or PresenceStore()
        self._pending: set[asyncio.Task[bool]] = set()

    async def fetch_conversations(self) -> None:
        await self.conversations.fetch_conversations(self._api)

    async def open_conversation(self, conversation: Conversation) -> None:
        self.conversations.set_selected_conversation(conversation)
        self.messages.reset(conversation.id)
        if conversation.mock:
            return

        peer = conversation.peer(self.principal.user_id)
        self.messages.patch(is_loading=True)
        try:
            loaded = await message_service.list_messages(peer.recipient_id, self._api)
        except AppError as exc:
            logger.warning("Fetching messages for %s failed: %s", conversation.id, exc.detail)
            if self._is_open(conversation.id):
                self.messages.patch(is_loading=False, error="Failed to fetch messages")
            return

        if not self._is_open(conversation.id):
            logger.debug("Discarding messages of %s, selection changed", conversation.id)
            return
        self.messages.patch(messages=tuple(loaded), is_loading=False)
        await self.acknowledge_seen()

    async def send_message(self, text: str, recipient_id: str | None = None) -> Message:
        selected = self.conversations.state.selected
        if recipient_id is None:
            if selected is None:
                raise ValidationError("No conversation selected")
            recipient_id = selected.peer(self.principal.user_id).recipient_id
        if not text.strip():
            raise ValidationError("Message text is empty")

        # The conversation the message lands in; None when it is not in the list yet.
        if selected is not None and selected.peer(self.principal.user_id).recipient_id == recipient_id:
            target: Conversation | None = selected
        else:
            target = self.conversations.find_with_user(recipient_id)

        self.messages.patch(is_sending=True, error=None)
        try:
            message, server_id = await message_service.post_message(text, recipient_id, self._api)
        except AppError as exc:
            logger.warning("Sending message to %s failed: %s", recipient_id, exc.detail)
            self.messages.patch(is_sending=False, error="Failed to send message")
            raise

        self.messages.patch(is_sending=False)
        if target is None and server_id:
            target = self.conversations.find_by_id(server_id)
        if target is None:
            return message

        if self._is_open(target.id):
            self.messages.set(
                lambda s: dataclasses.replace(
                    s, messages=reconciliation_service.append_message(s.messages, message),
                ),
            )
        self.conversations.set_conversations(
            lambda convs: reconciliation_service.patch_preview(
                convs, target.id, text=message.text, sender_id=message.sender_id, seen=False,
            ),
        )
        if server_id and target.mock:
            self._materialize(target, server_id)
        return message

    async def start_new_chat(self, recipient: Recipient) -> Conversation:
        """Open the conversation with ``recipient``, or a local placeholder for a first chat."""
        if recipient.recipient_id == self.principal.user_id:
            raise ValidationError("You cannot message yourself")

        existing = self.conversations.find_with_user(recipient.recipient_id)
        if existing is not None:
            await self.open_conversation(existing)
            return existing

        mock = conversation_service.build_mock_conversation(self.principal, recipient, self._clock)
        self.conversations.set_conversations(lambda convs: (mock, *convs))
        await self.open_conversation(mock)
        logger.info("Started new chat with %s", recipient.recipient_id)
        return mock

    def handle_event(self, event: ChannelEvent) -> None:
        if isinstance(event, NewMessageReceived):
            self._on_new_message(event)
        elif isinstance(event, MessagesSeen):
            self._on_messages_seen(event)
        elif isinstance(event, OnlineUsersChanged):
            self.presence.patch(online_users=event.user_ids)
        else:
            logger.warning("Ignoring unknown channel event %s", event.type)

    async def acknowledge_seen(self) -> bool:
        selected = self.conversations.state.selected
        if selected is None or selected.mock or not self._is_open(selected.id):
            return False
        if not reconciliation_service.needs_acknowledgement(
            self.messages.state.messages, self.principal.user_id,
        ):
            return False
        return await self._channel.send(
            MarkMessagesAsSeen(conversation_id=selected.id, user_id=self.principal.user_id),
        )

    async def drain(self) -> None:
        """Wait for scheduled acknowledgements."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _on_new_message(self, event: NewMessageReceived) -> None:
        # Inbound messages start unread for the local user.
        message = dataclasses.replace(event.message, seen=False)
        is_open = self._is_open(event.conversation_id)
        if is_open:
            self.messages.set(
                lambda s: dataclasses.replace(
                    s, messages=reconciliation_service.append_message(s.messages, message),
                ),
            )
        self.conversations.set_conversations(
            lambda convs: reconciliation_service.patch_preview(
                convs,
                event.conversation_id,
                text=message.text,
                sender_id=message.sender_id,
                seen=False,
            ),
        )
        if is_open and message.sender_id != self.principal.user_id:
            self._schedule_acknowledgement()

    def _on_messages_seen(self, event: MessagesSeen) -> None:
        if self._is_open(event.conversation_id):
            self.messages.set(
                lambda s: dataclasses.replace(
                    s, messages=reconciliation_service.mark_all_seen(s.messages),
                ),
            )
        self.conversations.set_conversations(
            lambda convs: reconciliation_service.mark_conversation_seen(convs, event.conversation_id),
        )

    def _materialize(self, placeholder: Conversation, server_id: str) -> None:
        self.conversations.set_conversations(
            lambda convs: reconciliation_service.materialize(convs, placeholder.id, server_id),
        )
        current = self.conversations.state.selected
        if current is not None and current.id == placeholder.id:
            self.conversations.set_selected_conversation(
                self.conversations.find_by_id(server_id)
                or dataclasses.replace(current, id=server_id, mock=False),
            )
            self.messages.patch(conversation_id=server_id)
        logger.info("Conversation %s materialized as %s", placeholder.id, server_id)

    def _schedule_acknowledgement(self) -> None:
        task = asyncio.get_running_loop().create_task(self.acknowledge_seen())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _is_open(self, conversation_id: str) -> bool:
        selected = self.conversations.state.selected
        return (
            selected is not None
            and selected.id == conversation_id
            and self.messages.state.conversation_id == conversation_id
        )
