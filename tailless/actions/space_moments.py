"""Space <-> Moment membership.

A Space holds the list of its Moment IDs; there is no reverse index.
Adding or removing requires the acting user to be both a contributor of the
Space and the author of the Moment.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions.auth import AuthContext
from tailless.actions.spaces import authorize_contributor
from tailless.core import messages
from tailless.core.response import ApiResponse, HttpStatus
from tailless.logging import get_logger
from tailless.storage import MomentsRepo, SpacesRepo

logger = get_logger(__name__)


async def _authorize_membership_change(
    db: AsyncSession, auth: AuthContext, space_id: str, moment_id: str
) -> ApiResponse:
    access = await authorize_contributor(db, auth, space_id)
    if not access.ok:
        return access

    if not moment_id:
        return ApiResponse.failure(HttpStatus.BAD_REQUEST, messages.INVALID_INPUT)

    moment_row = await MomentsRepo(db).get_moment(moment_id)
    if moment_row is None:
        return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.MOMENT_NOT_FOUND)

    if moment_row.author != access.data.user.id:
        logger.info(f"User {access.data.user.id} is not the author of moment {moment_id}")
        return ApiResponse.failure(HttpStatus.FORBIDDEN, messages.FORBIDDEN)

    return access


async def add_moment_to_space(
    db: AsyncSession, auth: AuthContext, space_id: str, moment_id: str
) -> ApiResponse:
    """Append a Moment to a Space. Already present -> 409, list untouched."""
    access = await _authorize_membership_change(db, auth, space_id, moment_id)
    if not access.ok:
        return access

    moments = access.data.space.moments
    if moment_id in moments:
        return ApiResponse.failure(HttpStatus.CONFLICT, messages.MOMENT_ALREADY_IN_SPACE)

    await SpacesRepo(db).patch_space(access.data.row, {"moments": [*moments, moment_id]})
    await db.commit()

    logger.info(f"Moment {moment_id} added to space {space_id}")
    return ApiResponse.success(messages.MOMENT_ADDED_TO_SPACE)


async def remove_moment_from_space(
    db: AsyncSession, auth: AuthContext, space_id: str, moment_id: str
) -> ApiResponse:
    """Remove a Moment from a Space. Absent -> 400."""
    access = await _authorize_membership_change(db, auth, space_id, moment_id)
    if not access.ok:
        return access

    moments = access.data.space.moments
    if moment_id not in moments:
        return ApiResponse.failure(HttpStatus.BAD_REQUEST, messages.MOMENT_NOT_IN_SPACE)

    remaining = [mid for mid in moments if mid != moment_id]
    await SpacesRepo(db).patch_space(access.data.row, {"moments": remaining})
    await db.commit()

    logger.info(f"Moment {moment_id} removed from space {space_id}")
    return ApiResponse.success(messages.MOMENT_REMOVED_FROM_SPACE)
