from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from gradspace.domain.entities.user import Recipient
from gradspace.domain.value_objects.ids import ConversationId, UserId


@dataclass(frozen=True, slots=True)
class Conversation:
    id: ConversationId
    participant1_id: UserId
    participant1_full_name: str
    participant1_profile_img: str
    participant2_id: UserId
    participant2_full_name: str
    participant2_profile_img: str
    last_message: str
    last_message_sender_id: str
    last_message_seen: bool
    created_at: datetime
    updated_at: datetime
    mock: bool = False

    def involves(self, user_id: str) -> bool:
        return user_id in (self.participant1_id, self.participant2_id)

    def peer(self, local_user_id: str) -> Recipient:
        """The participant that is not the local user."""
        if self.participant1_id == local_user_id:
            return Recipient(
                recipient_id=self.participant2_id,
                full_name=self.participant2_full_name,
                profile_img=self.participant2_profile_img,
            )
        return Recipient(
            recipient_id=self.participant1_id,
            full_name=self.participant1_full_name,
            profile_img=self.participant1_profile_img,
        )
