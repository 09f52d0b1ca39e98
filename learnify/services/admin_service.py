# learnify/services/admin_service.py
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from learnify.models.course import Course
from learnify.models.course_content import CourseContent
from learnify.models.enrollment import Enrollment
from learnify.models.role import Role, RoleName
from learnify.models.user import User
from learnify.schemas.admin import CourseStats, DeleteCourseResult
from learnify.schemas.course import (
    CourseBrief,
    CourseContentIn,
    CourseCreate,
    CourseEnrollmentCount,
    CourseSummary,
    CourseUpdate,
    CourseWithEnrollmentCount,
)
from learnify.schemas.enrollment import (
    CourseEnrollmentEntry,
    CourseEnrollments,
    EnrolledStudent,
)
from learnify.services.course_service import CourseService

logger = logging.getLogger(__name__)

COURSE_DELETED = "Course deleted successfully"
COURSE_DEACTIVATED = "Course deactivated due to existing enrollments"


def _to_price(value: Optional[float]) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def _build_contents(items: Optional[List[CourseContentIn]]) -> List[CourseContent]:
    return [
        CourseContent(
            title=item.title,
            content_type=item.content_type,
            file_path=item.file_path,
        )
        for item in items or []
    ]


class AdminService:
    """
    Course lifecycle and reporting for admins.

    Role checks happen in the route guards, not here.
    """

    def __init__(self, *, courses: CourseService):
        self.courses = courses

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise

    def create_course(self, db: Session, obj_in: CourseCreate) -> Course:
        """
        Insert the course and its content in one transaction.
        """
        course = Course(
            title=obj_in.title,
            description=obj_in.description,
            price=_to_price(obj_in.price),
            duration_hours=obj_in.duration_hours,
            is_active=obj_in.is_active,
        )
        course.contents = _build_contents(obj_in.course_content)
        db.add(course)
        self._commit(db)
        db.refresh(course)

        logger.info(
            "Created course course_id=%s with %d content item(s)",
            course.id,
            len(course.contents),
        )
        return course

    def update_course(self, db: Session, course_id: int, obj_in: CourseUpdate) -> Course:
        """
        Apply the fields the client sent.

        A ``courseContent`` key, even an empty list, replaces every existing
        content row; leaving the key out keeps the content as it is.
        """
        course = self.courses.get_course(db, course_id)

        update_data = obj_in.model_dump(exclude_unset=True)
        replace_content = "course_content" in update_data
        update_data.pop("course_content", None)
        if "price" in update_data:
            update_data["price"] = _to_price(update_data["price"])

        for field, value in update_data.items():
            setattr(course, field, value)

        if replace_content:
            # delete-orphan removes the old rows in the same flush
            course.contents = _build_contents(obj_in.course_content)

        db.add(course)
        self._commit(db)
        db.refresh(course)

        logger.info(
            "Updated course course_id=%s fields=%s content_replaced=%s",
            course.id,
            sorted(update_data),
            replace_content,
        )
        return course

    def count_enrollments(self, db: Session, course_id: int) -> int:
        return (
            db.query(func.count(Enrollment.id))
            .filter(Enrollment.course_id == course_id)
            .scalar()
        )

    def delete_course(self, db: Session, course_id: int) -> DeleteCourseResult:
        """
        Hard delete a course nobody enrolled in; otherwise only deactivate it
        so enrollment history keeps pointing at a real row.
        """
        course = self.courses.get_course(db, course_id)

        enrollment_count = self.count_enrollments(db, course.id)
        if enrollment_count > 0:
            course.is_active = False
            self._commit(db)
            db.refresh(course)
            logger.info(
                "Deactivated course course_id=%s (%d enrollment(s))",
                course.id,
                enrollment_count,
            )
            return DeleteCourseResult(
                message=COURSE_DEACTIVATED,
                soft_deleted=True,
                course=CourseSummary.model_validate(course),
            )

        db.delete(course)
        self._commit(db)
        logger.info("Deleted course course_id=%s", course_id)
        return DeleteCourseResult(message=COURSE_DELETED, soft_deleted=False)

    def list_courses_with_enrollment_counts(self, db: Session) -> List[CourseWithEnrollmentCount]:
        rows = (
            db.query(Course, func.count(Enrollment.id).label("enrollment_count"))
            .outerjoin(Enrollment, Enrollment.course_id == Course.id)
            .group_by(Course.id)
            .order_by(Course.created_at.desc(), Course.id.desc())
            .all()
        )
        return [
            CourseWithEnrollmentCount(
                **CourseSummary.model_validate(course).model_dump(),
                enrollment_count=enrollment_count,
            )
            for course, enrollment_count in rows
        ]

    def get_enrollment_count(self, db: Session, course_id: int) -> CourseEnrollmentCount:
        course = self.courses.get_course(db, course_id)
        return CourseEnrollmentCount(
            course_id=course.id,
            enrollment_count=self.count_enrollments(db, course.id),
        )

    def get_enrollments_by_course(self, db: Session, course_id: int) -> CourseEnrollments:
        course = self.courses.get_course(db, course_id)

        enrollments = (
            db.query(Enrollment)
            .join(User, Enrollment.student_id == User.id)
            .filter(Enrollment.course_id == course.id)
            .order_by(Enrollment.enrollment_date.desc(), Enrollment.id.desc())
            .all()
        )

        entries = [
            CourseEnrollmentEntry(
                id=enrollment.id,
                enrollment_date=enrollment.enrollment_date,
                status=enrollment.status,
                completion_date=enrollment.completion_date,
                student=EnrolledStudent(
                    id=enrollment.student.id,
                    first_name=enrollment.student.first_name,
                    last_name=enrollment.student.last_name,
                    email=enrollment.student.email,
                    role=enrollment.student.role.name if enrollment.student.role else None,
                ),
            )
            for enrollment in enrollments
        ]
        return CourseEnrollments(
            course=CourseBrief.model_validate(course),
            enrollments=entries,
            total_enrollments=len(entries),
        )

    def get_course_stats(self, db: Session) -> CourseStats:
        # four separate counts, not one snapshot
        total_courses = db.query(func.count(Course.id)).scalar()
        active_courses = (
            db.query(func.count(Course.id)).filter(Course.is_active.is_(True)).scalar()
        )
        total_enrollments = db.query(func.count(Enrollment.id)).scalar()
        total_students = (
            db.query(func.count(User.id))
            .join(Role, User.role_id == Role.id)
            .filter(Role.name == RoleName.student.value)
            .scalar()
        )
        return CourseStats(
            total_courses=total_courses,
            active_courses=active_courses,
            total_enrollments=total_enrollments,
            total_students=total_students,
        )
