"""Message-related Pydantic schemas."""

from pydantic import BaseModel, Field, validator
from datetime import datetime
from typing import Optional
from lookin.config import get_settings

settings = get_settings()


class MessageCreate(BaseModel):
    """Schema for creating a message."""
    content: str = Field(..., min_length=1)

    @validator('content')
    def content_not_empty(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Message content cannot be empty')
        if len(v) > settings.MAX_MESSAGE_LENGTH:
            raise ValueError(f'Message content cannot exceed {settings.MAX_MESSAGE_LENGTH} characters')
        return v


class MessageResponse(BaseModel):
    """Schema for message response data."""
    id: int
    content: str  # Decrypted content
    conversation_id: int
    sender_id: int
    is_read: bool = False
    created_at: datetime

    class Config:
        from_attributes = True


class WSMessage(BaseModel):
    """WebSocket message schema."""
    type: str  # "subscribe", "unsubscribe", "message", "mark_read", "typing"
    conversation_id: Optional[int] = None
    content: Optional[str] = None
