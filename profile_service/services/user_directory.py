"""User directory lookups."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from profile_service.core.errors import UserNotFoundError
from profile_service.models.user import Users


class SqlUserDirectory:
    """Identity service over the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: str) -> Users:
        """
        Resolve a user by internal identity.

        Raises:
            UserNotFoundError: If no user has this identity
        """
        result = await self.db.execute(select(Users).where(Users.user_id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise UserNotFoundError(user_id)
        return user
