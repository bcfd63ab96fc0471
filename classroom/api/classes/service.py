import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.auth.rbac import can_manage_class
from classroom.auth.schemas import CurrentUser
from classroom.core.config import settings
from classroom.core.enums import ClassStatus
from classroom.core.exceptions import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from classroom.core.models import LiveClass
from classroom.core.room_code import generate_room_code, normalize_room_code
from classroom.core.timeutils import as_utc

from .lifecycle import check_transition
from .schemas import ClassCreate, ClassResponse

logger = logging.getLogger(__name__)


def _class_to_response(c: LiveClass) -> ClassResponse:
    return ClassResponse(
        id=c.id,
        title=c.title,
        description=c.description,
        lecturer_id=c.lecturer_id,
        scheduled_at=as_utc(c.scheduled_at),
        duration=c.duration,
        status=c.status,
        room_code=c.room_code,
        recording_url=c.recording_url,
        created_at=as_utc(c.created_at),
    )


async def _get_class_row(db: AsyncSession, class_id: UUID) -> Optional[LiveClass]:
    result = await db.execute(select(LiveClass).where(LiveClass.id == class_id))
    return result.scalar_one_or_none()


async def create_class(
    db: AsyncSession,
    payload: ClassCreate,
    lecturer_id: UUID,
) -> ClassResponse:
    """Persist a new scheduled class with a freshly generated room code.

    Role checks (lecturer or admin) happen at the router.
    """
    if not isinstance(payload.duration, int) or payload.duration <= 0:
        raise ValidationError("Duration must be a positive number of minutes")

    # One extra round if the unique constraint catches a code taken between check and insert
    for attempt in range(2):
        room_code = await generate_room_code(db, settings.room_code_max_attempts)
        obj = LiveClass(
            title=payload.title,
            description=payload.description,
            lecturer_id=lecturer_id,
            scheduled_at=payload.scheduled_at,
            duration=payload.duration,
            status=ClassStatus.SCHEDULED.value,
            room_code=room_code,
        )
        db.add(obj)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            if attempt:
                raise
            logger.warning("Room code %s collided on insert, regenerating", room_code)
            continue
        await db.refresh(obj)
        logger.info("Created class %s with room code %s", obj.id, obj.room_code)
        return _class_to_response(obj)


async def get_class(db: AsyncSession, class_id: UUID) -> Optional[ClassResponse]:
    obj = await _get_class_row(db, class_id)
    return _class_to_response(obj) if obj else None


async def get_class_by_room_code(db: AsyncSession, room_code: str) -> Optional[ClassResponse]:
    result = await db.execute(
        select(LiveClass).where(LiveClass.room_code == normalize_room_code(room_code))
    )
    obj = result.scalar_one_or_none()
    return _class_to_response(obj) if obj else None


async def get_classes_by_lecturer(db: AsyncSession, lecturer_id: UUID) -> List[ClassResponse]:
    stmt = (
        select(LiveClass)
        .where(LiveClass.lecturer_id == lecturer_id)
        .order_by(LiveClass.scheduled_at.desc())
    )
    result = await db.execute(stmt)
    return [_class_to_response(c) for c in result.scalars().all()]


async def get_upcoming_classes(db: AsyncSession) -> List[ClassResponse]:
    """Student catalog: scheduled classes only, soonest first."""
    stmt = (
        select(LiveClass)
        .where(LiveClass.status == ClassStatus.SCHEDULED.value)
        .order_by(LiveClass.scheduled_at.asc())
    )
    result = await db.execute(stmt)
    return [_class_to_response(c) for c in result.scalars().all()]


async def get_managed_class(
    db: AsyncSession,
    class_id: UUID,
    current_user: CurrentUser,
) -> LiveClass:
    """Load a class the caller may manage (owner or admin)."""
    obj = await _get_class_row(db, class_id)
    if not obj:
        raise NotFoundError("Class not found")
    if not can_manage_class(current_user, obj.lecturer_id):
        raise ForbiddenError("Only the class lecturer or an admin can manage this class")
    return obj


async def update_class_status(
    db: AsyncSession,
    class_id: UUID,
    new_status: ClassStatus,
    current_user: CurrentUser,
) -> ClassResponse:
    obj = await get_managed_class(db, class_id, current_user)
    current = obj.status
    try:
        check_transition(current, new_status)
    except InvalidTransitionError:
        logger.info("Rejected status change for class %s: %s -> %s", obj.id, current, new_status.value)
        raise

    # Conditional write: a concurrent transition that got there first leaves rowcount at 0
    result = await db.execute(
        update(LiveClass)
        .where(LiveClass.id == class_id, LiveClass.status == current)
        .values(status=new_status.value)
    )
    if result.rowcount == 0:
        await db.rollback()
        await db.refresh(obj)
        raise InvalidTransitionError(obj.status, new_status.value)
    await db.commit()
    await db.refresh(obj)
    logger.info("Class %s status %s -> %s by %s", obj.id, current, obj.status, current_user.id)
    return _class_to_response(obj)


async def set_recording_url(
    db: AsyncSession,
    class_id: UUID,
    recording_url: str,
    current_user: CurrentUser,
) -> ClassResponse:
    obj = await get_managed_class(db, class_id, current_user)
    if obj.status != ClassStatus.ENDED.value:
        raise ValidationError("Recordings can only be attached to ended classes")
    obj.recording_url = recording_url.strip()
    await db.commit()
    await db.refresh(obj)
    return _class_to_response(obj)
