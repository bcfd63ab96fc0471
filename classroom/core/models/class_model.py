"""Scheduled or in-progress teaching sessions. Model named LiveClass to avoid Python 'class' keyword."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID

from classroom.core.enums import ClassStatus
from classroom.core.timeutils import utcnow
from classroom.db.session import Base


class LiveClass(Base):
    """A class owned by a lecturer. room_code is the public join key, assigned once at creation."""

    __tablename__ = "classes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    lecturer_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    # Minutes
    duration = Column(Integer, nullable=False, default=60)
    status = Column(String(20), nullable=False, default=ClassStatus.SCHEDULED.value, index=True)
    room_code = Column(String(16), nullable=False, unique=True)
    recording_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
