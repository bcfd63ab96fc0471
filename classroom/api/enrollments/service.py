import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.core.exceptions import NotFoundError
from classroom.core.models import Enrollment, LiveClass
from classroom.core.timeutils import as_utc

from .schemas import EnrollmentResponse

logger = logging.getLogger(__name__)


def _enrollment_to_response(e: Enrollment) -> EnrollmentResponse:
    return EnrollmentResponse(
        id=e.id,
        class_id=e.class_id,
        student_id=e.student_id,
        enrolled_at=as_utc(e.enrolled_at),
        attended=bool(e.attended),
    )


async def _find_enrollment(db: AsyncSession, class_id: UUID, student_id: UUID) -> Optional[Enrollment]:
    result = await db.execute(
        select(Enrollment).where(
            Enrollment.class_id == class_id,
            Enrollment.student_id == student_id,
        )
    )
    return result.scalar_one_or_none()


async def create_enrollment(
    db: AsyncSession,
    class_id: UUID,
    student_id: UUID,
) -> Tuple[EnrollmentResponse, bool]:
    """Enroll a student. Idempotent: returns (enrollment, created)."""
    if await db.get(LiveClass, class_id) is None:
        raise NotFoundError("Class not found")

    existing = await _find_enrollment(db, class_id, student_id)
    if existing:
        return _enrollment_to_response(existing), False

    obj = Enrollment(class_id=class_id, student_id=student_id, attended=False)
    db.add(obj)
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent request inserted the same pair first; hand back its row
        await db.rollback()
        existing = await _find_enrollment(db, class_id, student_id)
        if existing is None:
            raise
        return _enrollment_to_response(existing), False
    await db.refresh(obj)
    logger.info("Student %s enrolled in class %s", student_id, class_id)
    return _enrollment_to_response(obj), True


async def get_enrollments_by_class(db: AsyncSession, class_id: UUID) -> List[EnrollmentResponse]:
    result = await db.execute(
        select(Enrollment)
        .where(Enrollment.class_id == class_id)
        .order_by(Enrollment.enrolled_at)
    )
    return [_enrollment_to_response(e) for e in result.scalars().all()]


async def get_enrollments_by_student(db: AsyncSession, student_id: UUID) -> List[EnrollmentResponse]:
    result = await db.execute(
        select(Enrollment)
        .where(Enrollment.student_id == student_id)
        .order_by(Enrollment.enrolled_at)
    )
    return [_enrollment_to_response(e) for e in result.scalars().all()]


async def mark_attendance(
    db: AsyncSession,
    class_id: UUID,
    student_id: UUID,
) -> Optional[EnrollmentResponse]:
    """Set attended on an existing enrollment. Returns None (and creates nothing) if not enrolled."""
    obj = await _find_enrollment(db, class_id, student_id)
    if not obj:
        return None
    if not obj.attended:
        obj.attended = True
        await db.commit()
        await db.refresh(obj)
        logger.info("Attendance marked for student %s in class %s", student_id, class_id)
    return _enrollment_to_response(obj)
