"""Repository for user operations."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.core import schemas
from tailless.storage.models import User
from tailless.storage.query import Filter, Query


class UsersRepo:
    """Repository for user reads and first sign-in creation.

    Writes are flushed, not committed; the calling action owns the commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def to_schema(row: User) -> schemas.User:
        return schemas.User(id=row.id, name=row.name, email=row.email, image=row.image)

    async def get_user(self, user_id: str) -> User | None:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_users(self, filters: list[Filter]) -> list[User]:
        """List users matching every filter."""
        return await Query(User, filters).all(self.session)

    async def get_or_create_user(self, profile: schemas.Profile) -> tuple[User, bool]:
        """Return the stored user for ``profile.id``, creating it on first sign-in.

        An existing user is returned untouched; profile changes on the
        provider side are not synced.

        Returns:
            (user, created)
        """
        user = await self.get_user(profile.id)
        if user is not None:
            return user, False

        user = User(
            id=profile.id,
            name=profile.name,
            email=profile.email,
            image=profile.image,
            created_at=datetime.now(timezone.utc),
        )
        self.session.add(user)
        await self.session.flush()
        return user, True
