"""Space tag mutation. Contributors only."""

from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions.auth import AuthContext
from tailless.actions.spaces import authorize_contributor, unique
from tailless.core import messages
from tailless.core.response import ApiResponse, HttpStatus
from tailless.logging import get_logger
from tailless.storage import SpacesRepo

logger = get_logger(__name__)


def _valid_tags(tags: list[str] | None) -> bool:
    return isinstance(tags, list) and all(isinstance(tag, str) for tag in tags)


async def add_tags(
    db: AsyncSession, auth: AuthContext, space_id: str, tags: list[str]
) -> ApiResponse:
    """Merge ``tags`` into the Space's tags; existing order first, no repeats."""
    access = await authorize_contributor(
        db, auth, space_id, forbidden_message=messages.TAGS_FORBIDDEN
    )
    if not access.ok:
        return access
    if not _valid_tags(tags):
        return ApiResponse.failure(HttpStatus.BAD_REQUEST, messages.INVALID_INPUT)

    merged = unique([*access.data.space.tags, *tags])
    await SpacesRepo(db).patch_space(access.data.row, {"tags": merged})
    await db.commit()

    logger.info(f"Space {space_id} tags: +{len(merged) - len(access.data.space.tags)}")
    return ApiResponse.success(messages.TAGS_ADDED)


async def delete_tags(
    db: AsyncSession, auth: AuthContext, space_id: str, tags: list[str]
) -> ApiResponse:
    """Remove exactly the given tags; the rest keep their order."""
    access = await authorize_contributor(
        db, auth, space_id, forbidden_message=messages.TAGS_FORBIDDEN
    )
    if not access.ok:
        return access
    if not _valid_tags(tags):
        return ApiResponse.failure(HttpStatus.BAD_REQUEST, messages.INVALID_INPUT)

    doomed = set(tags)
    remaining = [tag for tag in access.data.space.tags if tag not in doomed]
    await SpacesRepo(db).patch_space(access.data.row, {"tags": remaining})
    await db.commit()

    logger.info(f"Space {space_id} tags: -{len(access.data.space.tags) - len(remaining)}")
    return ApiResponse.success(messages.TAGS_DELETED)


async def delete_all_tags(db: AsyncSession, auth: AuthContext, space_id: str) -> ApiResponse:
    access = await authorize_contributor(
        db, auth, space_id, forbidden_message=messages.TAGS_FORBIDDEN
    )
    if not access.ok:
        return access

    await SpacesRepo(db).patch_space(access.data.row, {"tags": []})
    await db.commit()

    logger.info(f"Space {space_id} tags cleared")
    return ApiResponse.success(messages.TAGS_ALL_DELETED)
