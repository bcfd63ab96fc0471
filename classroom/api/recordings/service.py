import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.core.models import Recording
from classroom.core.timeutils import as_utc

from .schemas import RecordingCreate, RecordingResponse

logger = logging.getLogger(__name__)


def _recording_to_response(r: Recording) -> RecordingResponse:
    return RecordingResponse(
        id=r.id,
        class_id=r.class_id,
        title=r.title,
        url=r.url,
        duration=r.duration,
        thumbnail_url=r.thumbnail_url,
        created_at=as_utc(r.created_at),
    )


async def create_recording(db: AsyncSession, payload: RecordingCreate) -> RecordingResponse:
    """Append recording metadata. The caller has already checked the class exists and may be managed."""
    obj = Recording(
        class_id=payload.class_id,
        title=payload.title.strip(),
        url=payload.url.strip(),
        duration=payload.duration,
        thumbnail_url=payload.thumbnail_url,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info("Recording %s added to class %s", obj.id, obj.class_id)
    return _recording_to_response(obj)


async def get_recordings_by_class(db: AsyncSession, class_id: UUID) -> List[RecordingResponse]:
    result = await db.execute(
        select(Recording)
        .where(Recording.class_id == class_id)
        .order_by(Recording.created_at.desc())
    )
    return [_recording_to_response(r) for r in result.scalars().all()]


async def get_all_recordings(db: AsyncSession, search: Optional[str] = None) -> List[RecordingResponse]:
    stmt = select(Recording)
    if search and search.strip():
        stmt = stmt.where(Recording.title.icontains(search.strip(), autoescape=True))
    stmt = stmt.order_by(Recording.created_at.desc())
    result = await db.execute(stmt)
    return [_recording_to_response(r) for r in result.scalars().all()]
