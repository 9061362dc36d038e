from __future__ import annotations

from typing import Callable, Protocol

from gradspace.domain.events.channel_event import ChannelEvent
from gradspace.domain.events.mark_messages_as_seen import MarkMessagesAsSeen

ChannelListener = Callable[[ChannelEvent], None]


class Channel(Protocol):
    def add_listener(self, listener: ChannelListener) -> Callable[[], None]:
        """Register a listener; the returned callable removes it."""
        ...

    async def send(self, event: MarkMessagesAsSeen) -> bool:
        """Send an outbound frame. Returns False when it was dropped."""
        ...
