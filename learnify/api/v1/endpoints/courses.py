# learnify/api/v1/endpoints/courses.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from learnify.api.deps import get_course_service
from learnify.db.session import get_db
from learnify.schemas.base import ApiResponse
from learnify.schemas.course import (
    CourseBrief,
    CourseContentListing,
    CourseContentPublic,
    CoursePublic,
    CourseSummary,
    CourseWithEnrollmentCount,
)
from learnify.services.course_service import CourseService

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get(
    "",
    response_model=ApiResponse[List[CourseWithEnrollmentCount]],
    response_model_exclude_unset=True,
)
def list_courses(
    search: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    course_service: CourseService = Depends(get_course_service),
):
    """
    Public catalog: active courses, newest first.
    """
    courses = course_service.list_active_courses(db, search=search, skip=skip, limit=limit)
    counts = course_service.count_enrollments_by_course(db, [c.id for c in courses])
    return ApiResponse(
        message="Courses retrieved successfully",
        data=[
            CourseWithEnrollmentCount(
                **CourseSummary.model_validate(c).model_dump(),
                enrollment_count=counts[c.id],
            )
            for c in courses
        ],
        total=len(courses),
    )


@router.get(
    "/{course_id}",
    response_model=ApiResponse[CoursePublic],
    response_model_exclude_unset=True,
)
def get_course(
    course_id: int,
    db: Session = Depends(get_db),
    course_service: CourseService = Depends(get_course_service),
):
    course = course_service.get_active_course(db, course_id)
    return ApiResponse(
        message="Course retrieved successfully",
        data=CoursePublic.model_validate(course),
    )


@router.get(
    "/{course_id}/content",
    response_model=ApiResponse[CourseContentListing],
    response_model_exclude_unset=True,
)
def get_course_content(
    course_id: int,
    db: Session = Depends(get_db),
    course_service: CourseService = Depends(get_course_service),
):
    course, contents = course_service.list_course_contents(db, course_id)
    return ApiResponse(
        message="Course content retrieved successfully",
        data=CourseContentListing(
            course=CourseBrief.model_validate(course),
            contents=[CourseContentPublic.model_validate(c) for c in contents],
        ),
    )
