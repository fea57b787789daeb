"""Authentication endpoints."""

from fastapi import APIRouter, HTTPException, status
from starlette.requests import Request

from src.taskflow.api.dependencies import AuthServiceDep
from src.taskflow.core.rate_limit import limiter
from src.taskflow.schemas.auth import (
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
)
from src.taskflow.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Account created"},
        409: {"description": "Email already registered"},
    },
)
@limiter.limit("3/minute")
async def register(request: Request, data: RegisterRequest, service: AuthServiceDep) -> UserRead:
    """Create an account. Log in afterwards to obtain tokens."""
    user = await service.register(data)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=TokenPair,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "refresh_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                    }
                }
            },
        },
        401: {"description": "Invalid credentials"},
    },
)
@limiter.limit("5/minute")
async def login(request: Request, login_data: LoginRequest, service: AuthServiceDep) -> TokenPair:
    """Authenticate with email and password."""
    tokens = await service.authenticate(login_data.email, login_data.password)
    if tokens is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return tokens


@router.post(
    "/refresh",
    response_model=TokenPair,
    responses={
        200: {"description": "New token pair; the old refresh token is revoked"},
        401: {"description": "Invalid, expired or revoked refresh token"},
    },
)
@limiter.limit("10/minute")
async def refresh(request: Request, data: RefreshRequest, service: AuthServiceDep) -> TokenPair:
    """Exchange a refresh token for a new pair (rotation)."""
    tokens = await service.refresh(data.refresh_token)
    if tokens is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )
    return tokens


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(data: LogoutRequest, service: AuthServiceDep) -> None:
    """Revoke a refresh token. Unknown tokens are ignored."""
    await service.revoke_refresh_token(data.refresh_token)
