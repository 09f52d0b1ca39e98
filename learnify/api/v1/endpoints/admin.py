# learnify/api/v1/endpoints/admin.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from learnify.api.deps import get_admin_service, get_enrollment_service, require_admin
from learnify.db.session import get_db
from learnify.schemas.admin import CourseStats
from learnify.schemas.base import ApiResponse
from learnify.schemas.course import (
    CourseCreate,
    CourseEnrollmentCount,
    CoursePublic,
    CourseSummary,
    CourseUpdate,
    CourseWithEnrollmentCount,
)
from learnify.schemas.enrollment import CourseEnrollments, EnrolledUser
from learnify.services.admin_service import AdminService
from learnify.services.enrollment_service import EnrollmentService

# every admin route needs an admin token
router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get(
    "/courses",
    response_model=ApiResponse[List[CourseWithEnrollmentCount]],
    response_model_exclude_unset=True,
)
def list_courses(
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
):
    """
    All courses, active or not, with their enrollment counts.
    """
    courses = admin_service.list_courses_with_enrollment_counts(db)
    return ApiResponse(
        message="Courses retrieved successfully",
        data=courses,
        total=len(courses),
    )


@router.post(
    "/courses",
    response_model=ApiResponse[CoursePublic],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_course(
    obj_in: CourseCreate,
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
):
    course = admin_service.create_course(db, obj_in)
    return ApiResponse(
        message="Course created successfully",
        data=CoursePublic.model_validate(course),
    )


@router.put(
    "/courses/{course_id}",
    response_model=ApiResponse[CoursePublic],
    response_model_exclude_unset=True,
)
def update_course(
    course_id: int,
    obj_in: CourseUpdate,
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
):
    course = admin_service.update_course(db, course_id, obj_in)
    return ApiResponse(
        message="Course updated successfully",
        data=CoursePublic.model_validate(course),
    )


@router.delete(
    "/courses/{course_id}",
    response_model=ApiResponse[CourseSummary],
    response_model_exclude_unset=True,
)
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
):
    """
    Hard delete without enrollments, deactivate otherwise; the message says
    which one happened.
    """
    result = admin_service.delete_course(db, course_id)
    return ApiResponse(message=result.message, data=result.course)


@router.get(
    "/courses/{course_id}/enrollment-count",
    response_model=ApiResponse[CourseEnrollmentCount],
    response_model_exclude_unset=True,
)
def get_course_enrollment_count(
    course_id: int,
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
):
    count = admin_service.get_enrollment_count(db, course_id)
    return ApiResponse(message="Enrollment count retrieved successfully", data=count)


@router.get(
    "/courses/{course_id}/users",
    response_model=ApiResponse[List[EnrolledUser]],
    response_model_exclude_unset=True,
)
def get_course_enrolled_users(
    course_id: int,
    db: Session = Depends(get_db),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
):
    users = enrollment_service.list_enrolled_users(db, course_id=course_id)
    return ApiResponse(
        message="Enrolled users retrieved successfully",
        data=users,
        total=len(users),
    )


@router.get(
    "/courses/{course_id}/enrollments",
    response_model=ApiResponse[CourseEnrollments],
    response_model_exclude_unset=True,
)
def get_enrollments_by_course(
    course_id: int,
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
):
    enrollments = admin_service.get_enrollments_by_course(db, course_id)
    return ApiResponse(message="Enrollments retrieved successfully", data=enrollments)


@router.get(
    "/dashboard/stats",
    response_model=ApiResponse[CourseStats],
    response_model_exclude_unset=True,
)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    admin_service: AdminService = Depends(get_admin_service),
):
    stats = admin_service.get_course_stats(db)
    return ApiResponse(message="Course statistics retrieved successfully", data=stats)
