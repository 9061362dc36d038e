"""Entrypoint: python -m gradspace"""
from __future__ import annotations

import asyncio
import logging

from gradspace.app import create_app, lifespan
from gradspace.application.state.conversations import ConversationState
from gradspace.application.state.messages import MessageListState
from gradspace.config import settings

logger = logging.getLogger("gradspace")


def _log_conversations(state: ConversationState) -> None:
    if state.error:
        logger.warning("Conversations: %s", state.error)
        return
    for conversation in state.conversations:
        seen = "" if conversation.last_message_seen else " (unread)"
        logger.info("[%s] %s%s", conversation.id, conversation.last_message, seen)


def _log_messages(state: MessageListState) -> None:
    if state.messages:
        last = state.messages[-1]
        logger.info("%s> %s", last.sender_id, last.text)


async def run_session() -> None:
    app = create_app(settings)
    app.chat.conversations.subscribe(_log_conversations)
    app.chat.messages.subscribe(_log_messages)
    app.chat.presence.subscribe(lambda s: logger.info("Online: %s", ", ".join(sorted(s.online_users))))

    async with lifespan(app):
        await app.chat.fetch_conversations()
        await asyncio.Event().wait()


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(run_session())
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
