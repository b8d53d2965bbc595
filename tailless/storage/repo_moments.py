"""Repository for Moment documents."""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.core import schemas
from tailless.storage.models import Moment
from tailless.storage.query import Filter, Query


class MomentsRepo:
    """Repository for Moment CRUD operations.

    Writes are flushed, not committed; the calling action owns the commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def to_schema(row: Moment) -> schemas.Moment:
        return schemas.Moment(
            id=row.id,
            title=row.title,
            author=row.author,
            content=row.content,
            created_at=row.created_at,
            modified_at=row.modified_at,
        )

    async def get_moment(self, moment_id: str) -> Moment | None:
        """Get moment by ID."""
        stmt = select(Moment).where(Moment.id == moment_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_moments(self, filters: list[Filter] | None = None) -> list[Moment]:
        return await Query(Moment, filters or []).all(self.session)

    async def insert_moment(
        self,
        *,
        title: str,
        author: str,
        content: str,
        created_at: str,
        modified_at: str,
    ) -> Moment:
        row = Moment(
            id=uuid.uuid4().hex,
            title=title,
            author=author,
            content=content,
            created_at=created_at,
            modified_at=modified_at,
        )
        self.session.add(row)
        await self.session.flush()
        return row

    async def patch_moment(self, row: Moment, changes: dict[str, Any]) -> Moment:
        for name, value in changes.items():
            setattr(row, name, value)
        await self.session.flush()
        return row

    async def delete_moment(self, row: Moment) -> None:
        await self.session.delete(row)
        await self.session.flush()
