from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class EnrollmentCreate(BaseModel):
    class_id: UUID


class AttendanceMarkRequest(BaseModel):
    """Mark attendance for a class.

    student_id defaults to the caller. Marking someone else requires owning the class or being admin.
    """

    class_id: UUID
    student_id: Optional[UUID] = Field(None, description="Defaults to the current user")


class EnrollmentResponse(BaseModel):
    id: UUID
    class_id: UUID
    student_id: UUID
    enrolled_at: datetime
    attended: bool

    class Config:
        from_attributes = True
