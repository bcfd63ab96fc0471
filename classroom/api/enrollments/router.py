from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from classroom.api.classes.service import get_managed_class
from classroom.auth.dependencies import get_current_user
from classroom.auth.schemas import CurrentUser
from classroom.core.exceptions import ServiceError
from classroom.db.session import get_db

from . import service
from .schemas import AttendanceMarkRequest, EnrollmentCreate, EnrollmentResponse

router = APIRouter(prefix="/api/enrollments", tags=["enrollments"])


@router.post(
    "",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def enroll(
    payload: EnrollmentCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> EnrollmentResponse:
    """Enroll the caller. Repeating the request returns the existing enrollment with 200."""
    try:
        enrollment, created = await service.create_enrollment(db, payload.class_id, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    if not created:
        response.status_code = status.HTTP_200_OK
    return enrollment


@router.get("/student", response_model=List[EnrollmentResponse])
async def list_my_enrollments(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> List[EnrollmentResponse]:
    return await service.get_enrollments_by_student(db, current_user.id)


@router.get("/class/{class_id}", response_model=List[EnrollmentResponse])
async def list_class_enrollments(
    class_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> List[EnrollmentResponse]:
    """Roster for a class. Owner or admin only."""
    try:
        await get_managed_class(db, class_id, current_user)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return await service.get_enrollments_by_class(db, class_id)


@router.post("/attendance", response_model=EnrollmentResponse)
async def mark_attendance(
    payload: AttendanceMarkRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> EnrollmentResponse:
    """Student: own attendance. Lecturer (owner) / admin: any enrolled student."""
    student_id = payload.student_id or current_user.id
    if student_id != current_user.id:
        try:
            await get_managed_class(db, payload.class_id, current_user)
        except ServiceError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message)

    enrollment = await service.mark_attendance(db, payload.class_id, student_id)
    if not enrollment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enrollment not found")
    return enrollment
