"""Conversation-related Pydantic schemas."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from lookin.schemas.message import MessageResponse


class ConversationCreate(BaseModel):
    """Schema for starting a conversation with another user."""
    other_user_id: int


class ConversationResponse(BaseModel):
    """Schema for conversation response data."""
    id: int
    user1_id: int
    user2_id: int
    created_at: datetime
    updated_at: datetime
    other_user_id: int
    other_user_name: str = "Unknown"
    other_user_photo: Optional[str] = None
    last_message: Optional[MessageResponse] = None
    last_message_time: str = ""
    unread_count: int = 0

    class Config:
        from_attributes = True
