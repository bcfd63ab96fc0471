from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ChatMessageCreate(BaseModel):
    class_id: UUID
    message: str = Field(..., max_length=2000)

    @field_validator("message")
    @classmethod
    def strip_message(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message cannot be empty")
        return value


class ChatMessageResponse(BaseModel):
    id: UUID
    class_id: UUID
    user_id: UUID
    message: str
    created_at: datetime

    class Config:
        from_attributes = True
