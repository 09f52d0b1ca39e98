# learnify/schemas/admin.py
from typing import Optional

from pydantic import BaseModel

from learnify.schemas.course import CourseSummary


class CourseStats(BaseModel):
    # snake_case on the wire, the dashboard reads these keys as-is
    total_courses: int
    active_courses: int
    total_enrollments: int
    total_students: int


class DeleteCourseResult(BaseModel):
    message: str
    soft_deleted: bool
    course: Optional[CourseSummary] = None
