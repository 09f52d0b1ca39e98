# learnify/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from learnify.api.deps import get_auth_service, get_current_user
from learnify.db.session import get_db
from learnify.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResult,
    RegisteredUser,
    RegisterRequest,
    UserPublic,
)
from learnify.schemas.base import ApiResponse
from learnify.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ApiResponse[RegisteredUser],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    user = auth_service.register_student(db, payload)
    return ApiResponse(message="Student registered successfully", data=user)


@router.post(
    "/login",
    response_model=ApiResponse[LoginResult],
    response_model_exclude_unset=True,
)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    result = auth_service.authenticate(db, payload.email, payload.password)
    return ApiResponse(message="Login successful", data=result)


@router.post("/logout", response_model=ApiResponse[None], response_model_exclude_unset=True)
def logout(current_user: CurrentUser = Depends(get_current_user)):
    """
    Tokens are stateless; the client drops its copy.
    """
    return ApiResponse(message="Logout successful")


@router.get("/me", response_model=ApiResponse[UserPublic], response_model_exclude_unset=True)
def read_me(current_user: CurrentUser = Depends(get_current_user)):
    return ApiResponse(message="User retrieved successfully", data=current_user)
