# learnify/models/course_content.py
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from learnify.db.base import Base


class CourseContent(Base):
    __tablename__ = "course_contents"
    __table_args__ = (
        CheckConstraint(
            "content_type IN ('pdf', 'text')", name="ck_course_contents_content_type"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    content_type = Column(String(20), nullable=False, index=True)
    file_path = Column(String(500), nullable=True)  # path of the uploaded file/doc

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    course = relationship("Course", back_populates="contents")
