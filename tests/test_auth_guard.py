"""
Bearer token resolution and role guards.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from learnify.api.deps import (
    get_optional_user,
    require_admin,
    require_any_role,
    require_student,
)
from learnify.core.errors import AuthorizationError
from learnify.models.role import RoleName
from learnify.schemas.auth import CurrentUser, TokenClaims

ME_URL = "/api/v1/auth/me"
ADMIN_COURSES_URL = "/api/v1/admin/courses"


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _current_user(role) -> CurrentUser:
    return CurrentUser(
        id=1,
        first_name="Test",
        last_name="User",
        email="someone@example.com",
        is_active=True,
        role=role,
    )


class TestGetCurrentUser:

    def test_missing_token(self, client):
        response = client.get(ME_URL)

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Access token is required"}

    def test_non_bearer_scheme_counts_as_missing(self, client):
        response = client.get(ME_URL, headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 401
        assert response.json()["message"] == "Access token is required"

    def test_invalid_token(self, client):
        response = client.get(ME_URL, headers=_bearer("not.a.token"))

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_expired_token(self, client, services, student_user):
        token = services.tokens.issue(
            TokenClaims(user_id=student_user.id, email=student_user.email, role="student"),
            now=datetime.now(timezone.utc) - timedelta(hours=25),
        )

        response = client.get(ME_URL, headers=_bearer(token))

        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    def test_user_no_longer_exists(self, client, services):
        token = services.tokens.issue(TokenClaims(user_id=999, email="ghost@example.com", role="student"))

        response = client.get(ME_URL, headers=_bearer(token))

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token - user not found"

    def test_deactivated_account(self, client, make_user, token_for):
        user = make_user("inactive@example.com", is_active=False)

        response = client.get(ME_URL, headers=_bearer(token_for(user)))

        assert response.status_code == 401
        assert response.json()["message"] == "Account is deactivated"

    def test_valid_token_resolves_user_without_password(self, client, student_user, student_headers):
        response = client.get(ME_URL, headers=student_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == student_user.id
        assert data["email"] == "student@example.com"
        assert data["role"] == "student"
        assert "passwordHash" not in data
        assert "password_hash" not in data

    def test_role_comes_from_database_not_token(self, client, services, student_user):
        # a forged role claim does not grant admin access
        token = services.tokens.issue(
            TokenClaims(user_id=student_user.id, email=student_user.email, role="admin")
        )

        response = client.get(ADMIN_COURSES_URL, headers=_bearer(token))

        assert response.status_code == 403


class TestRoleGuards:

    def test_student_cannot_reach_admin_routes(self, client, student_headers):
        response = client.get(ADMIN_COURSES_URL, headers=student_headers)

        assert response.status_code == 403
        assert response.json() == {
            "success": False,
            "message": "Access denied. admin role required",
        }

    def test_admin_cannot_enroll(self, client, admin_headers, make_course):
        course = make_course()

        response = client.post(
            f"/api/v1/enrollments/courses/{course.id}/enroll", headers=admin_headers
        )

        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. student role required"

    def test_admin_routes_require_token(self, client):
        response = client.get("/api/v1/admin/dashboard/stats")

        assert response.status_code == 401

    def test_missing_role_record(self):
        with pytest.raises(AuthorizationError) as exc_info:
            require_admin(current_user=_current_user(None))
        assert exc_info.value.message == "User role not found"

    def test_matching_role_passes_through(self):
        user = _current_user(RoleName.student)

        assert require_student(current_user=user) is user

    def test_any_role(self):
        guard = require_any_role([RoleName.admin, RoleName.student])
        admin_only = require_any_role([RoleName.admin])

        assert guard(current_user=_current_user(RoleName.student)).role == RoleName.student
        with pytest.raises(AuthorizationError) as exc_info:
            admin_only(current_user=_current_user(RoleName.student))
        assert exc_info.value.message == "Access denied. admin role required"


class TestOptionalUser:

    def test_no_token_gives_anonymous(self, db_session, services):
        assert get_optional_user(credentials=None, db=db_session, tokens=services.tokens) is None

    def test_valid_token_gives_user(self, db_session, services, student_user, token_for):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token_for(student_user))

        user = get_optional_user(credentials=credentials, db=db_session, tokens=services.tokens)

        assert user is not None
        assert user.id == student_user.id
        assert user.role == RoleName.student

    def test_bad_token_gives_anonymous(self, db_session, services):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="garbage")

        assert get_optional_user(credentials=credentials, db=db_session, tokens=services.tokens) is None

    def test_inactive_user_gives_anonymous(self, db_session, services, make_user, token_for):
        user = make_user("sleepy@example.com", is_active=False)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token_for(user))

        assert get_optional_user(credentials=credentials, db=db_session, tokens=services.tokens) is None
