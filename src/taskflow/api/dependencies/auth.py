"""Authentication dependency."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.taskflow.api.dependencies.repositories import UserRepo
from src.taskflow.core.logging import bind_user_context
from src.taskflow.core.security import TokenType, decode_token
from src.taskflow.models import User


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    user_repo: UserRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Validate the bearer access token and return the active user it names."""
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    if payload.get("type") != TokenType.ACCESS:
        raise _unauthorized("Invalid token type")

    subject = payload.get("sub")
    if not subject:
        raise _unauthorized("Invalid token payload")

    try:
        user_id = UUID(subject)
    except ValueError as e:
        raise _unauthorized("Invalid user_id in token") from e

    user = await user_repo.get_by_id(user_id)
    if user is None or not user.is_active:
        raise _unauthorized("User not found or inactive")

    bind_user_context(user.id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
