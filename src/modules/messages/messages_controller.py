# src/modules/messages/messages_controller.py
"""Messages controller with API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.common.database.database import get_db_session
from src.auth.dependencies import get_current_user
from src.models.models import User

from . import messages_service as service
from .schemas import (
    ConversationListResponse, ConversationDetailResponse,
    SendMessageRequest, SendMessageResponse, MarkReadResponse
)

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.get("/conversations", response_model=ConversationListResponse)
async def list_conversations(
    db: AsyncSession = Depends(get_db_session),
    current_user: User = Depends(get_current_user)
):
    """Get all conversations for the current user."""
    return await service.get_user_conversations(db, current_user)


@router.get("/conversations/{counterpart_id}", response_model=ConversationDetailResponse)
async def get_conversation(
    counterpart_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    current_user: User = Depends(get_current_user)
):
    """Get every message exchanged with one user."""
    return await service.get_conversation_messages(db, current_user, counterpart_id)


@router.post(
    "/conversations/{counterpart_id}",
    response_model=SendMessageResponse,
    status_code=status.HTTP_201_CREATED
)
async def send_message(
    counterpart_id: UUID,
    request: SendMessageRequest,
    db: AsyncSession = Depends(get_db_session),
    current_user: User = Depends(get_current_user)
):
    """Send a message to a user."""
    return await service.send_message(db, current_user, counterpart_id, request.content)


@router.put("/conversations/{counterpart_id}/read", response_model=MarkReadResponse)
async def mark_as_read(
    counterpart_id: UUID,
    db: AsyncSession = Depends(get_db_session),
    current_user: User = Depends(get_current_user)
):
    """Mark all messages from a user as read."""
    return await service.mark_messages_read(db, current_user, counterpart_id)
