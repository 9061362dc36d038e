from __future__ import annotations

from typing import Union

from gradspace.domain.events.messages_seen import MessagesSeen
from gradspace.domain.events.new_message_received import NewMessageReceived
from gradspace.domain.events.online_users_changed import OnlineUsersChanged
from gradspace.domain.events.unknown_event import UnknownEvent

# Everything the channel can deliver to listeners.
ChannelEvent = Union[NewMessageReceived, MessagesSeen, OnlineUsersChanged, UnknownEvent]
