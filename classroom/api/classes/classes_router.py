from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.auth.dependencies import get_current_user
from classroom.auth.rbac import require_staff
from classroom.auth.schemas import CurrentUser
from classroom.core.exceptions import ServiceError
from classroom.db.session import get_db

from .schemas import ClassCreate, ClassRecordingUpdate, ClassResponse, ClassStatusUpdate
from . import service

router = APIRouter(prefix="/api/classes", tags=["classes"])
lecturer_router = APIRouter(prefix="/api/lecturer", tags=["classes"])

CLASS_NOT_FOUND = "Class not found"


def _parse_class_id(raw: str) -> UUID:
    """Malformed ids are answered like unknown ones."""
    try:
        return UUID(raw)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=CLASS_NOT_FOUND)


@router.get("", response_model=List[ClassResponse])
async def list_upcoming_classes(
    db: AsyncSession = Depends(get_db),
) -> List[ClassResponse]:
    return await service.get_upcoming_classes(db)


@router.get("/room/{room_code}", response_model=ClassResponse)
async def get_class_by_room_code(
    room_code: str,
    db: AsyncSession = Depends(get_db),
) -> ClassResponse:
    obj = await service.get_class_by_room_code(db, room_code)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=CLASS_NOT_FOUND)
    return obj


@router.get("/{class_id}", response_model=ClassResponse)
async def get_class(
    class_id: str,
    db: AsyncSession = Depends(get_db),
) -> ClassResponse:
    obj = await service.get_class(db, _parse_class_id(class_id))
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=CLASS_NOT_FOUND)
    return obj


@router.post(
    "",
    response_model=ClassResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_class(
    payload: ClassCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_staff),
) -> ClassResponse:
    try:
        return await service.create_class(db, payload, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch("/{class_id}/status", response_model=ClassResponse)
async def update_class_status(
    class_id: str,
    payload: ClassStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ClassResponse:
    """Move a class along scheduled -> live -> ended, or scheduled -> cancelled. Owner or admin only."""
    try:
        return await service.update_class_status(db, _parse_class_id(class_id), payload.status, current_user)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch("/{class_id}/recording", response_model=ClassResponse)
async def set_class_recording(
    class_id: str,
    payload: ClassRecordingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> ClassResponse:
    try:
        return await service.set_recording_url(db, _parse_class_id(class_id), payload.recording_url, current_user)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@lecturer_router.get("/classes", response_model=List[ClassResponse])
async def list_my_classes(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> List[ClassResponse]:
    return await service.get_classes_by_lecturer(db, current_user.id)
