"""Space contributor management."""

from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions.auth import AuthContext, authorize_user
from tailless.actions.spaces import authorize_contributor
from tailless.core import messages
from tailless.core.response import ApiResponse, HttpStatus
from tailless.logging import get_logger
from tailless.storage import SpacesRepo, UsersRepo

logger = get_logger(__name__)


async def add_contributor(
    db: AsyncSession, auth: AuthContext, space_id: str, user_id: str
) -> ApiResponse:
    """Add ``user_id`` as a contributor. Only existing contributors may."""
    access = await authorize_contributor(
        db, auth, space_id, forbidden_message=messages.CONTRIBUTOR_ONLY_CAN_ADD
    )
    if not access.ok:
        return access

    if not user_id or await UsersRepo(db).get_user(user_id) is None:
        return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.CONTRIBUTOR_USER_MISSING)

    contributors = access.data.space.contributors
    if user_id in contributors:
        return ApiResponse.failure(HttpStatus.CONFLICT, messages.CONTRIBUTOR_EXISTS)

    await SpacesRepo(db).patch_space(
        access.data.row, {"contributors": [*contributors, user_id]}
    )
    await db.commit()

    logger.info(f"User {access.data.user.id} added contributor {user_id} to space {space_id}")
    return ApiResponse.success(messages.CONTRIBUTOR_ADDED)


async def remove_contributor(db: AsyncSession, auth: AuthContext, space_id: str) -> ApiResponse:
    """Remove the acting user from a Space's contributors.

    Only self-removal exists. The last contributor cannot leave; deleting
    the Space is the only way to drop them.
    """
    authorization = await authorize_user(db, auth)
    if not authorization.ok:
        return authorization

    repo = SpacesRepo(db)
    row = await repo.get_space(space_id) if space_id else None
    if row is None:
        return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.SPACE_NOT_FOUND)

    contributors = SpacesRepo.to_schema(row).contributors
    actor = authorization.data.id
    if actor not in contributors:
        return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.NOT_A_CONTRIBUTOR)

    if len(contributors) == 1:
        return ApiResponse.failure(HttpStatus.FORBIDDEN, messages.LAST_CONTRIBUTOR)

    await repo.patch_space(row, {"contributors": [c for c in contributors if c != actor]})
    await db.commit()

    logger.info(f"User {actor} left space {space_id}")
    return ApiResponse.success(messages.CONTRIBUTOR_REMOVED)
