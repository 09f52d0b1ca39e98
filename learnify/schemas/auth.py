# learnify/schemas/auth.py
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from learnify.models.role import RoleName
from learnify.schemas.base import CamelModel


class TokenClaims(BaseModel):
    user_id: int
    email: str
    role: str


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(CamelModel):
    first_name: str = Field(min_length=2, max_length=100)
    last_name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)


class RegisteredUser(CamelModel):
    """What registration returns: never the password hash."""

    id: int
    first_name: str
    last_name: str
    email: str
    is_active: bool
    role_id: int


class UserPublic(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    is_active: bool
    role: Optional[RoleName] = None


class LoginResult(CamelModel):
    user: UserPublic
    token: str


class CurrentUser(UserPublic):
    """Identity attached to a request by the auth guard."""
