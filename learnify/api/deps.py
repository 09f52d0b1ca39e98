# learnify/api/deps.py
from typing import Callable, Optional, Sequence

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from learnify.core.errors import (
    AuthenticationError,
    AuthorizationError,
    TokenInvalidError,
)
from learnify.core.security import TokenService
from learnify.db.session import get_db
from learnify.models.role import RoleName
from learnify.models.user import User
from learnify.schemas.auth import CurrentUser
from learnify.services.admin_service import AdminService
from learnify.services.auth_service import AuthService, to_user_public
from learnify.services.container import Services
from learnify.services.course_service import CourseService
from learnify.services.enrollment_service import EnrollmentService

# auto_error=False: a missing header gets our own 401 message
bearer_scheme = HTTPBearer(auto_error=False)


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_token_service(services: Services = Depends(get_services)) -> TokenService:
    return services.tokens


def get_auth_service(services: Services = Depends(get_services)) -> AuthService:
    return services.auth


def get_course_service(services: Services = Depends(get_services)) -> CourseService:
    return services.courses


def get_admin_service(services: Services = Depends(get_services)) -> AdminService:
    return services.admin


def get_enrollment_service(services: Services = Depends(get_services)) -> EnrollmentService:
    return services.enrollments


def _to_current_user(user: User) -> CurrentUser:
    return CurrentUser(**to_user_public(user).model_dump())


def _resolve_user(db: Session, tokens: TokenService, token: str) -> CurrentUser:
    claims = tokens.verify(token)

    user = db.get(User, claims.user_id)
    if user is None:
        raise TokenInvalidError("Invalid token - user not found")
    if not user.is_active:
        raise AuthenticationError("Account is deactivated")
    return _to_current_user(user)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> CurrentUser:
    """
    Resolve the bearer token to an active user.

    Missing token -> 401 "Access token is required"; bad token -> 401
    "Invalid token"; expired -> 401 "Token has expired".
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token is required")
    return _resolve_user(db, tokens, credentials.credentials)


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[CurrentUser]:
    """Like get_current_user, but anonymous callers get None instead of a 401."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return _resolve_user(db, tokens, credentials.credentials)
    except AuthenticationError:
        return None


def require_any_role(roles: Sequence[RoleName]) -> Callable[..., CurrentUser]:
    allowed = [role.value for role in roles]

    def _guard(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role is None:
            raise AuthorizationError("User role not found")
        if current_user.role.value not in allowed:
            if len(allowed) == 1:
                raise AuthorizationError(f"Access denied. {allowed[0]} role required")
            raise AuthorizationError(
                f"Access denied. One of these roles required: {', '.join(allowed)}"
            )
        return current_user

    return _guard


def require_role(role: RoleName) -> Callable[..., CurrentUser]:
    return require_any_role([role])


require_admin = require_role(RoleName.admin)
require_student = require_role(RoleName.student)
