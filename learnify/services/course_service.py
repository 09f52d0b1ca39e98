# learnify/services/course_service.py
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from learnify.core.errors import CourseNotFoundError
from learnify.models.course import Course
from learnify.models.course_content import CourseContent
from learnify.models.enrollment import Enrollment


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class CourseService:
    """Read side of the catalog, shared by public and admin endpoints."""

    def get_course(self, db: Session, course_id: int) -> Course:
        course = db.get(Course, course_id)
        if course is None:
            raise CourseNotFoundError()
        return course

    def get_active_course(self, db: Session, course_id: int) -> Course:
        # inactive courses are invisible to the public catalog
        course = self.get_course(db, course_id)
        if not course.is_active:
            raise CourseNotFoundError()
        return course

    def list_active_courses(
        self,
        db: Session,
        *,
        search: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Course]:
        query = db.query(Course).filter(Course.is_active.is_(True))

        if search and search.strip():
            pattern = _like_pattern(search.strip())
            query = query.filter(
                or_(
                    Course.title.ilike(pattern, escape="\\"),
                    Course.description.ilike(pattern, escape="\\"),
                )
            )

        query = query.order_by(Course.created_at.desc(), Course.id.desc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count_enrollments_by_course(self, db: Session, course_ids: List[int]) -> Dict[int, int]:
        """Enrollment count per course id; courses nobody joined map to 0."""
        if not course_ids:
            return {}
        rows = (
            db.query(Enrollment.course_id, func.count(Enrollment.id))
            .filter(Enrollment.course_id.in_(course_ids))
            .group_by(Enrollment.course_id)
            .all()
        )
        counts = {course_id: 0 for course_id in course_ids}
        counts.update({course_id: count for course_id, count in rows})
        return counts

    def list_course_contents(self, db: Session, course_id: int) -> Tuple[Course, List[CourseContent]]:
        course = self.get_active_course(db, course_id)
        contents = (
            db.query(CourseContent)
            .filter(CourseContent.course_id == course.id)
            .order_by(CourseContent.created_at.asc(), CourseContent.id.asc())
            .all()
        )
        return course, contents
