import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID

from classroom.core.timeutils import utcnow
from classroom.db.session import Base


class Enrollment(Base):
    """One student associated with one class. attended flips only via attendance marking."""

    __tablename__ = "enrollments"
    __table_args__ = (
        # At most one enrollment per student per class
        UniqueConstraint("class_id", "student_id", name="uq_enrollment_class_student"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    class_id = Column(UUID(as_uuid=True), ForeignKey("classes.id"), nullable=False, index=True)
    student_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    enrolled_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    attended = Column(Boolean, nullable=False, default=False)
