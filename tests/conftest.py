import os

# must be set before learnify.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from learnify.core.config import Settings  # noqa: E402
from learnify.db.base import Base  # noqa: E402
from learnify.db.init_db import init_db  # noqa: E402
from learnify.db.session import get_db  # noqa: E402
from learnify.main import create_app  # noqa: E402
from learnify.models.course import Course  # noqa: E402
from learnify.models.course_content import CourseContent  # noqa: E402
from learnify.models.enrollment import Enrollment  # noqa: E402
from learnify.models.role import Role, RoleName  # noqa: E402
from learnify.models.user import User  # noqa: E402
from learnify.schemas.auth import TokenClaims  # noqa: E402
from learnify.services.container import build_services  # noqa: E402

TEST_PASSWORD = "secret1"


@pytest.fixture
def test_settings():
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY="test-secret-key-that-is-long-enough-for-hs256",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def engine():
    """In-memory database shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(test_settings):
    return build_services(test_settings)


@pytest.fixture
def app(test_settings, engine, session_factory, services):
    application = create_app(test_settings, engine=engine)
    application.state.services = services

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db_session, services):
    def _make_user(
        email: str,
        role: RoleName = RoleName.student,
        *,
        password: str = TEST_PASSWORD,
        first_name: str = "Test",
        last_name: str = "User",
        is_active: bool = True,
    ) -> User:
        role_row = db_session.query(Role).filter(Role.name == role.value).one()
        user = User(
            email=email,
            password_hash=services.auth.hasher.hash(password),
            first_name=first_name,
            last_name=last_name,
            role_id=role_row.id,
            is_active=is_active,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def admin_user(make_user):
    return make_user("admin@example.com", RoleName.admin, first_name="Ada", last_name="Admin")


@pytest.fixture
def student_user(make_user):
    return make_user("student@example.com", RoleName.student, first_name="Sam", last_name="Student")


@pytest.fixture
def token_for(services):
    def _token_for(user: User) -> str:
        return services.tokens.issue(
            TokenClaims(user_id=user.id, email=user.email, role=user.role.name)
        )

    return _token_for


@pytest.fixture
def admin_headers(admin_user, token_for):
    return {"Authorization": f"Bearer {token_for(admin_user)}"}


@pytest.fixture
def student_headers(student_user, token_for):
    return {"Authorization": f"Bearer {token_for(student_user)}"}


@pytest.fixture
def make_course(db_session):
    def _make_course(
        title: str = "Intro to Python",
        *,
        description: str = "Learn the basics of Python programming.",
        price: float = 49.99,
        duration_hours: int = 10,
        is_active: bool = True,
        contents=(),
    ) -> Course:
        course = Course(
            title=title,
            description=description,
            price=price,
            duration_hours=duration_hours,
            is_active=is_active,
        )
        course.contents = [
            CourseContent(title=content_title, content_type=content_type, file_path=file_path)
            for content_title, content_type, file_path in contents
        ]
        db_session.add(course)
        db_session.commit()
        db_session.refresh(course)
        return course

    return _make_course


@pytest.fixture
def enroll(db_session):
    def _enroll(user: User, course: Course, status: str = "enrolled") -> Enrollment:
        enrollment = Enrollment(student_id=user.id, course_id=course.id, status=status)
        db_session.add(enrollment)
        db_session.commit()
        db_session.refresh(enrollment)
        return enrollment

    return _enroll
