"""Repository for Space documents."""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.core import schemas
from tailless.storage.json_utils import dump_str_list, load_str_list
from tailless.storage.models import Space
from tailless.storage.query import Filter, Query

LIST_FIELDS = ("contributors", "tags", "moments")


class SpacesRepo:
    """Repository for Space CRUD operations.

    Writes are flushed, not committed; the calling action owns the commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def to_schema(row: Space) -> schemas.Space:
        """Parse a stored row back into the Space schema."""
        return schemas.Space(
            id=row.id,
            title=row.title,
            image=row.image,
            description=row.description,
            contributors=load_str_list(row.contributors_json),
            tags=load_str_list(row.tags_json),
            moments=load_str_list(row.moments_json),
            created_at=row.created_at,
            layout=row.layout,
        )

    async def get_space(self, space_id: str) -> Space | None:
        """Get space by ID."""
        stmt = select(Space).where(Space.id == space_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_space_by_title(self, title: str) -> Space | None:
        """Exact, case-sensitive title lookup."""
        stmt = select(Space).where(Space.title == title)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_spaces(self, filters: list[Filter] | None = None) -> list[Space]:
        """List spaces matching every filter."""
        return await Query(Space, filters or []).all(self.session)

    async def insert_space(self, data: schemas.CreateSpace, created_at: str) -> Space:
        """Insert a new space document."""
        row = Space(
            id=uuid.uuid4().hex,
            title=data.title,
            image=data.image,
            description=data.description,
            contributors_json=dump_str_list(data.contributors),
            tags_json=dump_str_list(data.tags),
            moments_json=dump_str_list(data.moments),
            layout=data.layout.value,
            created_at=created_at,
        )
        self.session.add(row)
        await self.session.flush()
        return row

    async def patch_space(self, row: Space, changes: dict[str, Any]) -> Space:
        """Merge ``changes`` (schema field names) into the stored row."""
        for name, value in changes.items():
            if name in LIST_FIELDS:
                setattr(row, f"{name}_json", dump_str_list(list(value)))
            elif name == "layout":
                row.layout = schemas.Layout(value).value
            else:
                setattr(row, name, value)
        await self.session.flush()
        return row

    async def delete_space(self, row: Space) -> None:
        await self.session.delete(row)
        await self.session.flush()
