# learnify/schemas/enrollment.py
from datetime import datetime
from typing import List, Optional

from learnify.models.role import RoleName
from learnify.schemas.base import CamelModel
from learnify.schemas.course import CourseBrief


class EnrollmentSummary(CamelModel):
    id: int
    course_id: int
    course_title: str
    enrollment_date: datetime
    status: str


class EnrolledCourse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    price: float
    duration_hours: Optional[int] = None


class StudentEnrollment(CamelModel):
    id: int
    enrollment_date: datetime
    status: str
    completion_date: Optional[datetime] = None
    course: EnrolledCourse


class EnrolledUser(CamelModel):
    user_id: int
    user_name: str
    email: str
    enrollment_date: datetime


class EnrolledStudent(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    role: Optional[RoleName] = None


class CourseEnrollmentEntry(CamelModel):
    id: int
    enrollment_date: datetime
    status: str
    completion_date: Optional[datetime] = None
    student: EnrolledStudent


class CourseEnrollments(CamelModel):
    course: CourseBrief
    enrollments: List[CourseEnrollmentEntry]
    total_enrollments: int
