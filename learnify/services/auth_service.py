# learnify/services/auth_service.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from learnify.core.errors import (
    AccountInactiveError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    RoleNotFoundError,
)
from learnify.core.security import PasswordHasher, TokenService
from learnify.models.role import Role, RoleName
from learnify.models.user import User
from learnify.schemas.auth import (
    LoginResult,
    RegisteredUser,
    RegisterRequest,
    TokenClaims,
    UserPublic,
)

logger = logging.getLogger(__name__)


def to_user_public(user: User) -> UserPublic:
    return UserPublic(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        is_active=user.is_active,
        role=user.role.name if user.role is not None else None,
    )


class AuthService:
    def __init__(self, *, hasher: PasswordHasher, tokens: TokenService):
        self.hasher = hasher
        self.tokens = tokens

    def get_user_by_id(self, db: Session, user_id: int) -> Optional[User]:
        return db.get(User, user_id)

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def register_student(self, db: Session, payload: RegisterRequest) -> RegisteredUser:
        """
        Create a student account; registration never assigns any other role.
        """
        if self.get_user_by_email(db, payload.email) is not None:
            raise EmailAlreadyRegisteredError()

        student_role = db.query(Role).filter(Role.name == RoleName.student.value).first()
        if student_role is None:
            raise RoleNotFoundError(RoleName.student.value)

        user = User(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            password_hash=self.hasher.hash(payload.password),
            role_id=student_role.id,
            is_active=True,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError as exc:
            # lost a race with another registration for the same email
            db.rollback()
            raise EmailAlreadyRegisteredError() from exc
        db.refresh(user)

        logger.info("Registered student user_id=%s", user.id)
        return RegisteredUser.model_validate(user)

    def authenticate(self, db: Session, email: str, password: str) -> LoginResult:
        user = self.get_user_by_email(db, email)
        if user is None:
            raise InvalidCredentialsError()

        if not user.is_active:
            raise AccountInactiveError()

        if not self.hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        token = self.tokens.issue(
            TokenClaims(user_id=user.id, email=user.email, role=user.role.name)
        )
        return LoginResult(user=to_user_public(user), token=token)

    def update_password(self, db: Session, *, user_id: int, new_password: str) -> bool:
        user = self.get_user_by_id(db, user_id)
        if user is None:
            return False
        user.password_hash = self.hasher.hash(new_password)
        db.commit()
        return True

    def update_user_status(self, db: Session, *, user_id: int, is_active: bool) -> bool:
        user = self.get_user_by_id(db, user_id)
        if user is None:
            return False
        user.is_active = is_active
        db.commit()
        logger.info("User user_id=%s is_active=%s", user_id, is_active)
        return True
