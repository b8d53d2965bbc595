"""User read actions."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions.auth import AuthContext, authorize_user
from tailless.core import messages, schemas
from tailless.core.response import ApiResponse, HttpStatus
from tailless.core.schemas import validate
from tailless.storage import Equals, Prefix, UsersRepo


async def get_user(db: AsyncSession, user_id: str | None) -> ApiResponse[schemas.User]:
    """Get a single user by ID."""
    if not user_id:
        return ApiResponse.failure(HttpStatus.BAD_REQUEST, messages.USER_ID_REQUIRED)

    row = await UsersRepo(db).get_user(user_id)
    if row is None:
        return ApiResponse.failure(HttpStatus.NOT_FOUND, messages.USER_NOT_FOUND)

    return ApiResponse.success(messages.USER_FETCHED, UsersRepo.to_schema(row))


async def get_users(
    db: AsyncSession, auth: AuthContext, params: Any
) -> ApiResponse[list[schemas.User]]:
    """List users; ``name`` is a prefix filter, ``email`` an exact match."""
    authorization = await authorize_user(db, auth)
    if not authorization.ok:
        return authorization

    result = validate(schemas.GetUsers, params or {})
    if not result.ok:
        return result.error

    filters = []
    if result.value.name:
        filters.append(Prefix("name", result.value.name))
    if result.value.email:
        filters.append(Equals("email", result.value.email))

    rows = await UsersRepo(db).list_users(filters)
    return ApiResponse.success(
        messages.USERS_FETCHED, [UsersRepo.to_schema(row) for row in rows]
    )
