# learnify/models/enrollment.py
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from learnify.db.base import Base

UNIQUE_STUDENT_COURSE = "uq_enrollments_student_course"


class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (
        # one enrollment per (student, course), enforced by the database
        UniqueConstraint("student_id", "course_id", name=UNIQUE_STUDENT_COURSE),
        CheckConstraint(
            "status IN ('enrolled', 'completed')", name="ck_enrollments_status"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    course_id = Column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    enrollment_date = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    # enrolled / completed
    status = Column(String(20), nullable=False, default="enrolled", index=True)
    completion_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    student = relationship("User", back_populates="enrollments")
    course = relationship("Course", back_populates="enrollments")
