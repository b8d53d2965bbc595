"""Space CRUD actions.

Every mutating action runs the authorization gate first and then checks
that the acting user is one of the Space's contributors.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions.auth import AuthContext, authorize_user
from tailless.core import messages, schemas
from tailless.core.response import ApiResponse, HttpStatus
from tailless.core.schemas import patch_fields, utc_now_iso, validate
from tailless.logging import get_logger
from tailless.storage import AnyOf, Prefix, SpacesRepo, UsersRepo
from tailless.storage.models import Space as SpaceRow

logger = get_logger(__name__)


def unique(values: list[str]) -> list[str]:
    """Drop repeated values, keeping first occurrences in order."""
    return list(dict.fromkeys(values))


@dataclass
class ContributorAccess:
    """A verified contributor together with the Space they may mutate."""

    user: schemas.User
    row: SpaceRow
    space: schemas.Space


async def authorize_contributor(
    db: AsyncSession,
    auth: AuthContext,
    space_id: str,
    forbidden_message: str = messages.FORBIDDEN,
) -> ApiResponse[ContributorAccess]:
    """Auth gate, Space lookup and contributor check in one step."""
    authorization = await authorize_user(db, auth)
    if not authorization.ok:
        return authorization

    if not space_id:
        return ApiResponse.failure(HttpStatus.BAD_REQUEST, messages.INVALID_INPUT)

    row = await SpacesRepo(db).get_space(space_id)
    if row is None:
        return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.SPACE_NOT_FOUND)

    space = SpacesRepo.to_schema(row)
    user = authorization.data
    if user.id not in space.contributors:
        logger.info(f"User {user.id} is not a contributor of space {space_id}")
        return ApiResponse.failure(HttpStatus.FORBIDDEN, forbidden_message)

    return ApiResponse.success(messages.SPACE_FETCHED, ContributorAccess(user, row, space))


async def _check_contributor_change(
    db: AsyncSession, user_id: str, current: list[str], proposed: list[str]
) -> ApiResponse | None:
    """Hold a contributors patch to the add/remove contributor rules.

    Only the acting user may drop out, the list never empties, and every
    newly listed user must exist.
    """
    if not proposed:
        return ApiResponse.failure(HttpStatus.FORBIDDEN, messages.SPACE_NEEDS_CONTRIBUTOR)

    removed = set(current) - set(proposed)
    if removed - {user_id}:
        logger.info(f"User {user_id} tried to remove contributors {sorted(removed - {user_id})}")
        return ApiResponse.failure(HttpStatus.FORBIDDEN, messages.CONTRIBUTOR_REMOVE_SELF_ONLY)

    users = UsersRepo(db)
    for added in proposed:
        if added not in current and await users.get_user(added) is None:
            return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.CONTRIBUTOR_USER_MISSING)

    return None


async def create_space(
    db: AsyncSession, auth: AuthContext, payload: Any
) -> ApiResponse[schemas.Space]:
    """Create a Space.

    The creator must be a contributor: an empty contributor list becomes
    ``[creator]``, a non-empty list without the creator is rejected. Titles
    are unique (exact, case-sensitive).
    """
    authorization = await authorize_user(db, auth)
    if not authorization.ok:
        return authorization

    result = validate(schemas.CreateSpace, payload)
    if not result.ok:
        return result.error

    data = result.value
    creator = authorization.data.id

    if not data.contributors:
        data = data.model_copy(update={"contributors": [creator]})
    elif creator not in data.contributors:
        return ApiResponse.failure(HttpStatus.FORBIDDEN, messages.FORBIDDEN)

    data = data.model_copy(
        update={
            "contributors": unique(data.contributors),
            "moments": unique(data.moments),
        }
    )

    repo = SpacesRepo(db)
    if await repo.get_space_by_title(data.title) is not None:
        return ApiResponse.failure(HttpStatus.CONFLICT, messages.SPACE_EXISTS)

    try:
        row = await repo.insert_space(data, created_at=data.created_at or utc_now_iso())
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent create of the same title
        await db.rollback()
        return ApiResponse.failure(HttpStatus.CONFLICT, messages.SPACE_EXISTS)

    logger.info(f"User {creator} created space {row.id}")
    return ApiResponse.success(messages.SPACE_CREATED, SpacesRepo.to_schema(row))


async def get_space(db: AsyncSession, payload: Any) -> ApiResponse[schemas.Space]:
    result = validate(schemas.GetSpace, payload)
    if not result.ok:
        return result.error

    row = await SpacesRepo(db).get_space(result.value.id)
    if row is None:
        return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.SPACE_NOT_FOUND)

    return ApiResponse.success(messages.SPACE_FETCHED, SpacesRepo.to_schema(row))


async def get_spaces(db: AsyncSession, payload: Any) -> ApiResponse[list[schemas.Space]]:
    """List Spaces.

    ``title`` filters by prefix; ``tags`` and ``contributors`` match when the
    Space shares at least one value. Filters combine with AND.
    """
    result = validate(schemas.GetSpaces, payload or {})
    if not result.ok:
        return result.error

    params = result.value
    filters = []
    if params.title:
        filters.append(Prefix("title", params.title))
    if params.tags:
        filters.append(AnyOf("tags", params.tags))
    if params.contributors:
        filters.append(AnyOf("contributors", params.contributors))

    rows = await SpacesRepo(db).list_spaces(filters)
    return ApiResponse.success(
        messages.SPACES_FETCHED, [SpacesRepo.to_schema(row) for row in rows]
    )


async def update_space(
    db: AsyncSession, auth: AuthContext, payload: Any
) -> ApiResponse[schemas.Space]:
    """Apply a partial patch to a Space the acting user contributes to."""
    authorization = await authorize_user(db, auth)
    if not authorization.ok:
        return authorization

    result = validate(schemas.UpdateSpace, payload)
    if not result.ok:
        return result.error

    changes = patch_fields(result.value, exclude={"id"})
    if any(value is None for name, value in changes.items() if name != "image"):
        return ApiResponse.failure(HttpStatus.BAD_REQUEST, messages.INVALID_INPUT)

    access = await authorize_contributor(db, auth, result.value.id)
    if not access.ok:
        return access
    row = access.data.row

    if "contributors" in changes:
        changes["contributors"] = unique(changes["contributors"])
        rejected = await _check_contributor_change(
            db, access.data.user.id, access.data.space.contributors, changes["contributors"]
        )
        if rejected is not None:
            return rejected
    if "moments" in changes:
        changes["moments"] = unique(changes["moments"])

    repo = SpacesRepo(db)
    if "title" in changes and changes["title"] != row.title:
        if await repo.get_space_by_title(changes["title"]) is not None:
            return ApiResponse.failure(HttpStatus.CONFLICT, messages.SPACE_EXISTS)

    try:
        await repo.patch_space(row, changes)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        return ApiResponse.failure(HttpStatus.CONFLICT, messages.SPACE_EXISTS)

    logger.info(f"User {access.data.user.id} updated space {row.id}: {sorted(changes)}")
    return ApiResponse.success(messages.SPACE_UPDATED, SpacesRepo.to_schema(row))


async def delete_space(db: AsyncSession, auth: AuthContext, payload: Any) -> ApiResponse:
    authorization = await authorize_user(db, auth)
    if not authorization.ok:
        return authorization

    result = validate(schemas.DeleteSpace, payload)
    if not result.ok:
        return result.error

    access = await authorize_contributor(db, auth, result.value.id)
    if not access.ok:
        return access

    await SpacesRepo(db).delete_space(access.data.row)
    await db.commit()

    logger.info(f"User {access.data.user.id} deleted space {result.value.id}")
    return ApiResponse.success(messages.SPACE_DELETED)
