from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from personal_manager.core.deps import get_auth_service, get_current_user_id
from personal_manager.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserRead
from personal_manager.schemas.common import ApiResponse
from personal_manager.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


# PUBLIC_INTERFACE
@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    summary="Register user",
    description="Create a User-role account and return an access token for it.",
)
async def register_user(
    payload: RegisterRequest,
    auth: AuthService = Depends(get_auth_service),
) -> ApiResponse[AuthResponse]:
    """Register a new user; 400 when the username or email is taken."""
    result = await auth.register(
        username=payload.username,
        email=str(payload.email),
        password=payload.password,
        full_name=payload.full_name,
    )
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username or email already exists",
        )
    return ApiResponse.ok(result, message="Registration successful")


# PUBLIC_INTERFACE
@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    summary="Login",
    description="Authenticate with username and password and receive an access token.",
)
async def login(
    payload: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> ApiResponse[AuthResponse]:
    """Authenticate user and issue a token."""
    result = await auth.login(payload.username, payload.password)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    return ApiResponse.ok(result, message="Login successful")


# PUBLIC_INTERFACE
@router.get(
    "/me",
    response_model=ApiResponse[UserRead],
    summary="Current user",
    description="Return the user identified by the bearer token.",
)
async def read_me(
    user_id: int = Depends(get_current_user_id),
    auth: AuthService = Depends(get_auth_service),
) -> ApiResponse[UserRead]:
    user = await auth.get_current_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return ApiResponse.ok(user)
