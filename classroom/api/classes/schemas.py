from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from classroom.core.enums import ClassStatus
from classroom.core.timeutils import as_utc


class ClassCreate(BaseModel):
    title: str = Field(..., min_length=3)
    description: Optional[str] = None
    scheduled_at: datetime
    duration: int = Field(60, ge=15, le=240, description="Minutes (15 to 240)")

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Title must be at least 3 characters")
        return value

    @field_validator("scheduled_at")
    @classmethod
    def scheduled_at_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are taken as UTC
        return as_utc(value)


class ClassStatusUpdate(BaseModel):
    status: ClassStatus


class ClassRecordingUpdate(BaseModel):
    recording_url: str = Field(..., min_length=1)


class ClassResponse(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    lecturer_id: UUID
    scheduled_at: datetime
    duration: int
    status: ClassStatus
    room_code: str
    recording_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
