from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ConversationSchema(BaseModel):
    id: str
    participant1_id: str = Field(alias="participant1Id")
    participant1_full_name: str = Field(default="", alias="participant1FullName")
    participant1_profile_img: str = Field(default="", alias="participant1ProfileImg")
    participant2_id: str = Field(alias="participant2Id")
    participant2_full_name: str = Field(default="", alias="participant2FullName")
    participant2_profile_img: str = Field(default="", alias="participant2ProfileImg")
    last_message: str = Field(default="", alias="lastMessage")
    last_message_sender_id: str = Field(default="", alias="lastMessageSenderId")
    last_message_seen: bool = Field(default=False, alias="lastMessageSeen")
    mock: bool = False
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class ConversationListResponse(BaseModel):
    conversations: list[ConversationSchema] | None = None
