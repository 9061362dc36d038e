from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MessageSchema(BaseModel):
    id: str
    sender_id: str = Field(alias="senderId")
    text: str
    seen: bool = False
    created_at: datetime = Field(alias="createdAt")
    conversation_id: str | None = Field(default=None, alias="conversationId")

    model_config = ConfigDict(populate_by_name=True)


class MessageListResponse(BaseModel):
    messages: list[MessageSchema] | None = None


class SendMessageRequest(BaseModel):
    content: str
    recipient_id: str = Field(alias="recipientId")

    model_config = ConfigDict(populate_by_name=True)
