# src/modules/messages/messages_service.py
"""
Service layer for direct messages.

There is no conversation table: a conversation is every message exchanged
with one counterpart, and the conversation list is folded out of the
caller's messages in a single pass.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Sequence
from uuid import UUID

from sqlalchemy import select, update, or_, and_, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.common.database.database import query_errors
from src.common.exceptions import ProfileError, ValidationError
from src.common.utils.global_messages import GlobalMessages
from src.models.models import User, Message, utcnow
from .schemas import (
    ConversationResponse, ConversationListResponse, ConversationDetailResponse,
    CounterpartResponse, MessageResponse, SendMessageResponse, MarkReadResponse
)

logger = logging.getLogger(__name__)


def _get_initials(user: User) -> str:
    """Get initials from a user's name."""
    first = (user.first_name or "").strip()
    last = (user.last_name or "").strip()
    if first and last:
        return f"{first[0]}{last[0]}".upper()
    name = first or last
    return name[:2].upper() if name else "??"


def _format_time_ago(dt: datetime) -> str:
    """Format datetime as relative time string."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    seconds = (utcnow() - dt).total_seconds()

    if seconds < 60:
        return "Just now"
    elif seconds < 3600:
        return f"{int(seconds / 60)}m ago"
    elif seconds < 86400:
        return f"{int(seconds / 3600)}h ago"
    else:
        return f"{int(seconds / 86400)}d ago"


def _build_counterpart(user: User) -> CounterpartResponse:
    return CounterpartResponse(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        avatar_url=user.avatar_url,
        initials=_get_initials(user),
    )


def _build_message_response(message: Message, current_user_id: UUID) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        sender_id=message.sender_id,
        recipient_id=message.recipient_id,
        content=message.content,
        is_read=message.is_read,
        created_at=message.created_at,
        is_mine=message.sender_id == current_user_id,
    )


def fold_conversations(messages: Sequence[Message], current_user_id: UUID) -> List[ConversationResponse]:
    """
    Group messages by counterpart.

    `messages` must be ordered newest first, so the first message seen for a
    counterpart is the latest one and the result keeps that order. Unread
    counts only messages the counterpart sent to the current user.
    """
    conversations: Dict[UUID, ConversationResponse] = {}

    for message in messages:
        incoming = message.sender_id != current_user_id
        counterpart = message.sender if incoming else message.recipient
        if counterpart is None:
            continue

        conversation = conversations.get(counterpart.id)
        if conversation is None:
            conversation = ConversationResponse(
                counterpart=_build_counterpart(counterpart),
                last_message=_build_message_response(message, current_user_id),
                last_message_time=_format_time_ago(message.created_at),
            )
            conversations[counterpart.id] = conversation

        if incoming and not message.is_read:
            conversation.unread_count += 1

    return list(conversations.values())


async def _get_counterpart(session: AsyncSession, counterpart_id: UUID) -> User:
    async with query_errors(session, "load user"):
        result = await session.execute(select(User).where(User.id == counterpart_id))
        counterpart = result.scalar_one_or_none()
    if counterpart is None:
        raise ProfileError(GlobalMessages.USER_NOT_FOUND)
    return counterpart


async def get_user_conversations(
    session: AsyncSession,
    user: User
) -> ConversationListResponse:
    """Get all conversations for the user, most recent first."""
    async with query_errors(session, "load conversations"):
        result = await session.execute(
            select(Message)
            .options(selectinload(Message.sender), selectinload(Message.recipient))
            .where(or_(Message.sender_id == user.id, Message.recipient_id == user.id))
            .order_by(desc(Message.created_at))
        )
        messages = result.scalars().all()

    conversations = fold_conversations(messages, user.id)
    return ConversationListResponse(conversations=conversations, total=len(conversations))


async def get_conversation_messages(
    session: AsyncSession,
    user: User,
    counterpart_id: UUID
) -> ConversationDetailResponse:
    """Every message exchanged with one counterpart, oldest first."""
    counterpart = await _get_counterpart(session, counterpart_id)

    async with query_errors(session, "load messages"):
        result = await session.execute(
            select(Message)
            .where(
                or_(
                    and_(Message.sender_id == user.id, Message.recipient_id == counterpart_id),
                    and_(Message.sender_id == counterpart_id, Message.recipient_id == user.id),
                )
            )
            .order_by(Message.created_at)
        )
        messages = result.scalars().all()

    return ConversationDetailResponse(
        counterpart=_build_counterpart(counterpart),
        messages=[_build_message_response(m, user.id) for m in messages],
    )


async def send_message(
    session: AsyncSession,
    user: User,
    counterpart_id: UUID,
    content: str
) -> SendMessageResponse:
    """Send a message to another user."""
    content = content.strip()
    if not content:
        raise ValidationError("Message content cannot be empty")
    if counterpart_id == user.id:
        raise ValidationError("You cannot send a message to yourself")

    await _get_counterpart(session, counterpart_id)

    message = Message(sender_id=user.id, recipient_id=counterpart_id, content=content)
    async with query_errors(session, "send message"):
        session.add(message)
        await session.commit()

    logger.info(f"Message {message.id} sent from {user.id} to {counterpart_id}")
    return SendMessageResponse(success=True, message=_build_message_response(message, user.id))


async def mark_messages_read(
    session: AsyncSession,
    user: User,
    counterpart_id: UUID
) -> MarkReadResponse:
    """Mark everything the counterpart sent to the user as read."""
    async with query_errors(session, "mark messages read"):
        result = await session.execute(
            update(Message)
            .where(
                Message.sender_id == counterpart_id,
                Message.recipient_id == user.id,
                Message.is_read == False  # noqa: E712
            )
            .values(is_read=True)
        )
        await session.commit()

    return MarkReadResponse(success=True, marked_count=result.rowcount)
