from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.auth.dependencies import get_current_user
from classroom.auth.schemas import CurrentUser
from classroom.core.exceptions import ServiceError
from classroom.db.session import get_db

from . import service
from .schemas import ChatMessageCreate, ChatMessageResponse

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.get(
    "/{class_id}",
    response_model=List[ChatMessageResponse],
    dependencies=[Depends(get_current_user)],
)
async def list_messages(
    class_id: UUID,
    since: Optional[datetime] = Query(None, description="Only messages created after this instant"),
    db: AsyncSession = Depends(get_db),
) -> List[ChatMessageResponse]:
    return await service.get_chat_messages_by_class(db, class_id, since=since)


@router.post(
    "",
    response_model=ChatMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    payload: ChatMessageCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ChatMessageResponse:
    try:
        return await service.create_chat_message(db, payload.class_id, current_user.id, payload.message)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
