from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskflow.core.exceptions import InternalError
from src.taskflow.core.security import hash_password
from src.taskflow.models import User
from src.taskflow.models.base import utc_now
from src.taskflow.schemas.user import UserUpdate


class UserService:
    """Profile management for the authenticated user."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def update(self, user: User, data: UserUpdate) -> tuple[User, bool]:
        """Update the profile.

        Returns:
            Tuple of (user, password_changed)
        """
        update_data = {
            k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None
        }

        password_changed = "password" in update_data
        if password_changed:
            update_data["hashed_password"] = hash_password(update_data.pop("password"))

        try:
            for field, value in update_data.items():
                setattr(user, field, value)
            user.updated_at = utc_now()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise InternalError("user.update") from e
        return user, password_changed
