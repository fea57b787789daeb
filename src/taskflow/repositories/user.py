"""Repository for User entity."""

from uuid import UUID

from sqlmodel import select

from src.taskflow.models import User
from src.taskflow.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email (emails are stored lowercased)."""
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def lock(self, user_id: UUID) -> User | None:
        """Lock the user's row for the rest of the transaction.

        Concurrent timer starts for the same user serialize on this lock.
        """
        return await self.get_by_id(user_id, for_update=True)
