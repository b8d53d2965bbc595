"""Moment CRUD actions."""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions.auth import AuthContext, authorize_user
from tailless.core import messages, schemas
from tailless.core.response import ApiResponse, HttpStatus
from tailless.core.schemas import patch_fields, utc_now_iso, validate
from tailless.logging import get_logger
from tailless.storage import AnyOf, Equals, MomentsRepo, Prefix, SpacesRepo, load_str_list

logger = get_logger(__name__)


async def create_moment(
    db: AsyncSession, auth: AuthContext, payload: Any
) -> ApiResponse[schemas.Moment]:
    """Create a Moment authored by the acting user.

    ``author`` defaults to the acting user and may not name anyone else.
    Both timestamps are set by the server.
    """
    authorization = await authorize_user(db, auth)
    if not authorization.ok:
        return authorization

    result = validate(schemas.CreateMoment, payload)
    if not result.ok:
        return result.error

    data = result.value
    actor = authorization.data.id
    if data.author is not None and data.author != actor:
        return ApiResponse.failure(HttpStatus.FORBIDDEN, messages.FORBIDDEN)

    now = utc_now_iso()
    row = await MomentsRepo(db).insert_moment(
        title=data.title,
        author=actor,
        content=data.content,
        created_at=now,
        modified_at=now,
    )
    await db.commit()

    logger.info(f"User {actor} created moment {row.id}")
    return ApiResponse.success(messages.MOMENT_CREATED, MomentsRepo.to_schema(row))


async def get_moment(db: AsyncSession, payload: Any) -> ApiResponse[schemas.Moment]:
    result = validate(schemas.GetMoment, payload)
    if not result.ok:
        return result.error

    row = await MomentsRepo(db).get_moment(result.value.id)
    if row is None:
        return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.MOMENT_NOT_FOUND)

    return ApiResponse.success(messages.MOMENT_FETCHED, MomentsRepo.to_schema(row))


async def get_moments(db: AsyncSession, payload: Any) -> ApiResponse[list[schemas.Moment]]:
    """List Moments; ``title`` is a prefix filter, ``author`` an exact match."""
    result = validate(schemas.GetMoments, payload or {})
    if not result.ok:
        return result.error

    filters = []
    if result.value.title:
        filters.append(Prefix("title", result.value.title))
    if result.value.author:
        filters.append(Equals("author", result.value.author))

    rows = await MomentsRepo(db).list_moments(filters)
    return ApiResponse.success(
        messages.MOMENTS_FETCHED, [MomentsRepo.to_schema(row) for row in rows]
    )


async def update_moment(
    db: AsyncSession, auth: AuthContext, payload: Any
) -> ApiResponse[schemas.Moment]:
    """Patch a Moment. Only its author may; ``modifiedAt`` is refreshed."""
    authorization = await authorize_user(db, auth)
    if not authorization.ok:
        return authorization

    result = validate(schemas.UpdateMoment, payload)
    if not result.ok:
        return result.error

    changes = patch_fields(result.value, exclude={"id", "modified_at"})
    if any(value is None for value in changes.values()):
        return ApiResponse.failure(HttpStatus.BAD_REQUEST, messages.INVALID_INPUT)

    repo = MomentsRepo(db)
    row = await repo.get_moment(result.value.id)
    if row is None:
        return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.MOMENT_NOT_FOUND)

    actor = authorization.data.id
    if row.author != actor or changes.get("author", actor) != actor:
        return ApiResponse.failure(HttpStatus.FORBIDDEN, messages.FORBIDDEN)

    changes["modified_at"] = utc_now_iso()
    await repo.patch_moment(row, changes)
    await db.commit()

    logger.info(f"User {actor} updated moment {row.id}")
    return ApiResponse.success(messages.MOMENT_UPDATED, MomentsRepo.to_schema(row))


async def delete_moment(db: AsyncSession, auth: AuthContext, payload: Any) -> ApiResponse:
    """Delete a Moment and pull its ID out of every Space that lists it.

    The reference cleanup and the delete share one transaction: on failure
    nothing is written.
    """
    authorization = await authorize_user(db, auth)
    if not authorization.ok:
        return authorization

    result = validate(schemas.DeleteMoment, payload)
    if not result.ok:
        return result.error

    moment_id = result.value.id
    repo = MomentsRepo(db)
    row = await repo.get_moment(moment_id)
    if row is None:
        return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.MOMENT_NOT_FOUND)

    actor = authorization.data.id
    if row.author != actor:
        return ApiResponse.failure(HttpStatus.FORBIDDEN, messages.FORBIDDEN)

    spaces_repo = SpacesRepo(db)
    try:
        referencing = await spaces_repo.list_spaces([AnyOf("moments", [moment_id])])
        for space_row in referencing:
            remaining = [mid for mid in load_str_list(space_row.moments_json) if mid != moment_id]
            await spaces_repo.patch_space(space_row, {"moments": remaining})
        await repo.delete_moment(row)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(f"Deleting moment {moment_id} failed, rolled back")
        raise

    logger.info(
        f"User {actor} deleted moment {moment_id} "
        f"(removed from {len(referencing)} space(s))"
    )
    return ApiResponse.success(messages.MOMENT_DELETED)
