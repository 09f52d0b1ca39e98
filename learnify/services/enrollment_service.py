# learnify/services/enrollment_service.py
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager

from learnify.core.errors import (
    AlreadyEnrolledError,
    CourseUnavailableError,
    RoleNotAllowedError,
    StudentNotFoundError,
)
from learnify.models.course import Course
from learnify.models.enrollment import UNIQUE_STUDENT_COURSE, Enrollment
from learnify.models.role import RoleName
from learnify.models.user import User
from learnify.schemas.enrollment import (
    EnrolledCourse,
    EnrolledUser,
    EnrollmentSummary,
    StudentEnrollment,
)
from learnify.services.course_service import CourseService

logger = logging.getLogger(__name__)

# SQLite names the columns instead of the constraint
_SQLITE_DUPLICATE = "UNIQUE constraint failed: enrollments.student_id, enrollments.course_id"


def _is_duplicate_enrollment(exc: IntegrityError) -> bool:
    diag = getattr(exc.orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None)
    if constraint_name:
        return constraint_name == UNIQUE_STUDENT_COURSE
    message = str(exc.orig)
    return UNIQUE_STUDENT_COURSE in message or _SQLITE_DUPLICATE in message


class EnrollmentService:
    def __init__(self, *, courses: CourseService):
        self.courses = courses

    def enroll(self, db: Session, *, student_id: int, course_id: int) -> EnrollmentSummary:
        """
        Enroll a student in an active course.

        Uniqueness of (student, course) is left to the database constraint:
        the row is inserted optimistically and a constraint violation means a
        concurrent or earlier request already enrolled this student.
        """
        course = (
            db.query(Course)
            .filter(Course.id == course_id, Course.is_active.is_(True))
            .first()
        )
        if course is None:
            raise CourseUnavailableError()

        student = db.get(User, student_id)
        if student is None:
            raise StudentNotFoundError()
        if student.role is None or student.role.name != RoleName.student.value:
            raise RoleNotAllowedError()

        enrollment = Enrollment(
            student_id=student.id,
            course_id=course.id,
            status="enrolled",
        )
        db.add(enrollment)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if not _is_duplicate_enrollment(exc):
                # e.g. the course was hard-deleted after the active check
                raise
            raise AlreadyEnrolledError() from exc
        db.refresh(enrollment)

        logger.info(
            "Enrolled student_id=%s in course_id=%s enrollment_id=%s",
            student.id,
            course.id,
            enrollment.id,
        )
        return EnrollmentSummary(
            id=enrollment.id,
            course_id=course.id,
            course_title=course.title,
            enrollment_date=enrollment.enrollment_date,
            status=enrollment.status,
        )

    def list_student_enrollments(self, db: Session, *, student_id: int) -> List[StudentEnrollment]:
        """
        Enrollments of one student whose course is still active.

        Deactivated or deleted courses drop out of this list.
        """
        enrollments = (
            db.query(Enrollment)
            .join(Enrollment.course)
            .options(contains_eager(Enrollment.course))
            .filter(
                Enrollment.student_id == student_id,
                Course.is_active.is_(True),
            )
            .order_by(Enrollment.enrollment_date.desc(), Enrollment.id.desc())
            .all()
        )
        return [
            StudentEnrollment(
                id=enrollment.id,
                enrollment_date=enrollment.enrollment_date,
                status=enrollment.status,
                completion_date=enrollment.completion_date,
                course=EnrolledCourse.model_validate(enrollment.course),
            )
            for enrollment in enrollments
        ]

    def list_enrolled_users(self, db: Session, *, course_id: int) -> List[EnrolledUser]:
        course = self.courses.get_course(db, course_id)

        enrollments = (
            db.query(Enrollment)
            .join(Enrollment.student)
            .options(contains_eager(Enrollment.student))
            .filter(
                Enrollment.course_id == course.id,
                Enrollment.status == "enrolled",
            )
            .order_by(Enrollment.enrollment_date.desc(), Enrollment.id.desc())
            .all()
        )
        return [
            EnrolledUser(
                user_id=enrollment.student.id,
                user_name=enrollment.student.full_name,
                email=enrollment.student.email,
                enrollment_date=enrollment.enrollment_date,
            )
            for enrollment in enrollments
        ]
