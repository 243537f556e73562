# src/modules/messages/schemas.py
"""Pydantic schemas for messages module."""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field
from uuid import UUID

from src.models.models import UserRole


class MessageResponse(BaseModel):
    id: UUID
    sender_id: UUID
    recipient_id: UUID
    content: str
    is_read: bool
    created_at: datetime
    is_mine: bool  # True if sent by current user


class CounterpartResponse(BaseModel):
    """The other person in a conversation."""
    id: UUID
    first_name: str
    last_name: str
    role: UserRole
    avatar_url: Optional[str] = None
    initials: str  # e.g. "MJ"


class ConversationResponse(BaseModel):
    counterpart: CounterpartResponse
    last_message: MessageResponse
    last_message_time: str  # e.g. "5m ago"
    unread_count: int = 0


class ConversationListResponse(BaseModel):
    conversations: List[ConversationResponse]
    total: int


class ConversationDetailResponse(BaseModel):
    counterpart: CounterpartResponse
    messages: List[MessageResponse]


class SendMessageRequest(BaseModel):
    content: str = Field(..., max_length=5000)


class SendMessageResponse(BaseModel):
    success: bool
    message: MessageResponse


class MarkReadResponse(BaseModel):
    success: bool
    marked_count: int
