# learnify/api/v1/endpoints/enrollments.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from learnify.api.deps import get_enrollment_service, require_student
from learnify.db.session import get_db
from learnify.schemas.auth import CurrentUser
from learnify.schemas.base import ApiResponse
from learnify.schemas.enrollment import EnrollmentSummary, StudentEnrollment
from learnify.services.enrollment_service import EnrollmentService

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


@router.post(
    "/courses/{course_id}/enroll",
    response_model=ApiResponse[EnrollmentSummary],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def enroll_in_course(
    course_id: int,
    current_student: CurrentUser = Depends(require_student),
    db: Session = Depends(get_db),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
):
    enrollment = enrollment_service.enroll(
        db, student_id=current_student.id, course_id=course_id
    )
    return ApiResponse(message="Successfully enrolled in course", data=enrollment)


@router.get(
    "/enrollments",
    response_model=ApiResponse[List[StudentEnrollment]],
    response_model_exclude_unset=True,
)
def list_my_enrollments(
    current_student: CurrentUser = Depends(require_student),
    db: Session = Depends(get_db),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
):
    enrollments = enrollment_service.list_student_enrollments(
        db, student_id=current_student.id
    )
    return ApiResponse(
        message="Enrollments retrieved successfully",
        data=enrollments,
        total=len(enrollments),
    )
