from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class RecordingCreate(BaseModel):
    class_id: UUID
    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    duration: Optional[int] = Field(None, ge=0, description="Seconds")
    thumbnail_url: Optional[str] = None


class RecordingResponse(BaseModel):
    id: UUID
    class_id: UUID
    title: str
    url: str
    duration: Optional[int] = None
    thumbnail_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
