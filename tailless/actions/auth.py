"""Authorization gate and session lifecycle.

The acting identity is passed explicitly to every action as an
``AuthContext``. ``authorize_user`` re-resolves it against storage on every
call: token -> unexpired session -> user.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.config import config
from tailless.core import messages, schemas
from tailless.core.response import ApiResponse, HttpStatus
from tailless.core.schemas import WireModel, validate
from tailless.logging import get_logger
from tailless.storage import SessionsRepo, UsersRepo

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Credentials presented with a request (possibly none)."""

    token: str | None = None


ANONYMOUS = AuthContext()


class SessionGrant(WireModel):
    token: str
    expires_at: str
    user: schemas.User


async def authorize_user(db: AsyncSession, auth: AuthContext) -> ApiResponse[schemas.User]:
    """Resolve the acting user or fail with 401."""
    unauthorized = ApiResponse.failure(HttpStatus.UNAUTHORIZED, messages.UNAUTHORIZED)

    if not auth.token:
        return unauthorized

    session_row = await SessionsRepo(db).get_active_session(auth.token)
    if session_row is None:
        return unauthorized

    user_row = await UsersRepo(db).get_user(session_row.user_id)
    if user_row is None:
        logger.warning(f"Session {session_row.token[:6]}... points at missing user")
        return unauthorized

    try:
        user = UsersRepo.to_schema(user_row)
    except ValidationError:
        logger.warning(f"Stored user {user_row.id} failed validation")
        return unauthorized

    return ApiResponse.success(messages.USER_AUTHORIZED, user)


async def sign_in(db: AsyncSession, profile: Any) -> ApiResponse[SessionGrant]:
    """Create a session from an identity provider profile.

    The user row is created on first sign-in only; later sign-ins reuse it
    unchanged.
    """
    result = validate(schemas.Profile, profile)
    if not result.ok:
        return result.error

    users_repo = UsersRepo(db)
    user_row, created = await users_repo.get_or_create_user(result.value)
    session_row = await SessionsRepo(db).create_session(
        user_row.id, config.session_max_age_seconds
    )
    await db.commit()

    if created:
        logger.info(f"Created user {user_row.id} on first sign-in")
    logger.info(f"Issued session for user {user_row.id}")

    grant = SessionGrant(
        token=session_row.token,
        expires_at=session_row.expires_at.isoformat() + "Z",
        user=UsersRepo.to_schema(user_row),
    )
    return ApiResponse.success(messages.SESSION_CREATED, grant)


async def sign_out(db: AsyncSession, auth: AuthContext) -> ApiResponse:
    """Invalidate the presented session."""
    authorization = await authorize_user(db, auth)
    if not authorization.ok:
        return authorization

    await SessionsRepo(db).delete_session(auth.token)
    await db.commit()
    logger.info(f"Signed out user {authorization.data.id}")
    return ApiResponse.success(messages.SESSION_DELETED)
