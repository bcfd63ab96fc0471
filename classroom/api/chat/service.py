from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.core.exceptions import NotFoundError, ValidationError
from classroom.core.models import ChatMessage, LiveClass
from classroom.core.timeutils import as_utc

from .schemas import ChatMessageResponse


def _message_to_response(m: ChatMessage) -> ChatMessageResponse:
    return ChatMessageResponse(
        id=m.id,
        class_id=m.class_id,
        user_id=m.user_id,
        message=m.message,
        created_at=as_utc(m.created_at),
    )


async def create_chat_message(
    db: AsyncSession,
    class_id: UUID,
    user_id: UUID,
    message: str,
) -> ChatMessageResponse:
    text = (message or "").strip()
    if not text:
        raise ValidationError("Message cannot be empty")
    if await db.get(LiveClass, class_id) is None:
        raise NotFoundError("Class not found")

    obj = ChatMessage(class_id=class_id, user_id=user_id, message=text)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return _message_to_response(obj)


async def get_chat_messages_by_class(
    db: AsyncSession,
    class_id: UUID,
    since: Optional[datetime] = None,
) -> List[ChatMessageResponse]:
    """Oldest first. since: only messages created strictly after it (incremental polling)."""
    stmt = select(ChatMessage).where(ChatMessage.class_id == class_id)
    if since is not None:
        stmt = stmt.where(ChatMessage.created_at > as_utc(since))
    # id breaks ties between messages stamped in the same instant
    stmt = stmt.order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
    result = await db.execute(stmt)
    return [_message_to_response(m) for m in result.scalars().all()]
