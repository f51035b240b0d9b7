from fastapi import APIRouter, Depends, status

from task_api.schemas.user import AuthResponse, UserCreate, UserLogin, UserRead
from task_api.services.auth_service import AuthService
from ..deps import get_auth_service

router = APIRouter(prefix="/auth")


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(user_create: UserCreate, service: AuthService = Depends(get_auth_service)):
    result = service.signup(user_create)
    return AuthResponse(
        message="Account created successfully.",
        token=result.token,
        user=UserRead.model_validate(result.user),
    )


@router.post("/login", response_model=AuthResponse)
def login(user_credentials: UserLogin, service: AuthService = Depends(get_auth_service)):
    result = service.login(user_credentials)
    return AuthResponse(
        message="Login successful.",
        token=result.token,
        user=UserRead.model_validate(result.user),
    )
