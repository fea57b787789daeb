from fastapi import APIRouter

from src.taskflow.api.dependencies import AuthServiceDep, CurrentUser, UserServiceDep
from src.taskflow.schemas.user import UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
async def get_me(current_user: CurrentUser) -> UserRead:
    return UserRead.model_validate(current_user)


@router.patch("/me", response_model=UserRead)
async def update_me(
    data: UserUpdate,
    current_user: CurrentUser,
    service: UserServiceDep,
    auth_service: AuthServiceDep,
) -> UserRead:
    """Update the profile. Changing the password signs out every session."""
    user, password_changed = await service.update(current_user, data)
    if password_changed:
        await auth_service.revoke_all_tokens_for_user(user.id)
    return UserRead.model_validate(user)
