# learnify/core/errors.py
"""
Error taxonomy for the Learnify API.

Every error carries the HTTP status it maps to, so the exception handlers in
``learnify.main`` never need to look at message text.
"""
from typing import Dict, Optional


class LearnifyError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class ValidationError(LearnifyError):
    status_code = 400


class AuthenticationError(LearnifyError):
    status_code = 401

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class AuthorizationError(LearnifyError):
    status_code = 403


class NotFoundError(LearnifyError):
    status_code = 404

    def __init__(self, resource: str, message: Optional[str] = None):
        super().__init__(message or f"{resource.capitalize()} not found")
        self.resource = resource


class ConflictError(LearnifyError):
    # 400 rather than 409, clients already branch on it
    status_code = 400


class InternalError(LearnifyError):
    status_code = 500


# token service
class TokenInvalidError(AuthenticationError):
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenExpiredError(AuthenticationError):
    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class TokenGenerationError(InternalError):
    def __init__(self, reason: str):
        super().__init__(f"Token generation failed: {reason}")


# accounts
class InvalidCredentialsError(AuthenticationError):
    def __init__(self):
        super().__init__("Invalid email or password")


class AccountInactiveError(AuthenticationError):
    def __init__(self):
        super().__init__("Account is not active")


class EmailAlreadyRegisteredError(ValidationError):
    def __init__(self):
        super().__init__("User already exists with this email")


class RoleNotFoundError(InternalError):
    def __init__(self, role_name: str):
        super().__init__(f"{role_name.capitalize()} role not found in system")
        self.role_name = role_name


# courses and enrollments
class CourseNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("course")


class StudentNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("student")


class CourseUnavailableError(ValidationError):
    def __init__(self):
        super().__init__("Course not found or not available")


class RoleNotAllowedError(AuthorizationError):
    def __init__(self):
        super().__init__("Only students can enroll in courses")


class AlreadyEnrolledError(ConflictError):
    def __init__(self):
        super().__init__("Already enrolled in this course")
