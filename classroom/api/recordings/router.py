from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.api.classes.service import get_managed_class
from classroom.auth.dependencies import get_current_user
from classroom.auth.schemas import CurrentUser
from classroom.core.exceptions import ServiceError
from classroom.db.session import get_db

from . import service
from .schemas import RecordingCreate, RecordingResponse

router = APIRouter(prefix="/api/recordings", tags=["recordings"])


@router.get("", response_model=List[RecordingResponse])
async def list_recordings(
    search: Optional[str] = Query(None, description="Case-insensitive match on title"),
    db: AsyncSession = Depends(get_db),
) -> List[RecordingResponse]:
    return await service.get_all_recordings(db, search=search)


@router.get("/class/{class_id}", response_model=List[RecordingResponse])
async def list_class_recordings(
    class_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> List[RecordingResponse]:
    return await service.get_recordings_by_class(db, class_id)


@router.post(
    "",
    response_model=RecordingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_recording(
    payload: RecordingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> RecordingResponse:
    try:
        await get_managed_class(db, payload.class_id, current_user)
        return await service.create_recording(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
