from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from gradspace.domain.value_objects.ids import MessageId, UserId


@dataclass(frozen=True, slots=True)
class Message:
    id: MessageId
    sender_id: UserId
    text: str
    seen: bool
    created_at: datetime
