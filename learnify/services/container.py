# learnify/services/container.py
"""
Service instances, built once per application in ``create_app`` and handed
to the routes through ``learnify.api.deps``.
"""
from dataclasses import dataclass

from learnify.core.config import Settings
from learnify.core.security import PasswordHasher, TokenService, build_password_context
from learnify.services.admin_service import AdminService
from learnify.services.auth_service import AuthService
from learnify.services.course_service import CourseService
from learnify.services.enrollment_service import EnrollmentService


@dataclass(frozen=True)
class Services:
    tokens: TokenService
    auth: AuthService
    courses: CourseService
    admin: AdminService
    enrollments: EnrollmentService


def build_services(config: Settings) -> Services:
    tokens = TokenService.from_settings(config)
    hasher = PasswordHasher(build_password_context(config.BCRYPT_ROUNDS))
    courses = CourseService()
    return Services(
        tokens=tokens,
        auth=AuthService(hasher=hasher, tokens=tokens),
        courses=courses,
        admin=AdminService(courses=courses),
        enrollments=EnrollmentService(courses=courses),
    )


