"""Space endpoints, including membership, contributors and tags."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions import (
    AuthContext,
    add_contributor,
    add_moment_to_space,
    add_tags,
    create_space,
    delete_all_tags,
    delete_space,
    delete_tags,
    get_space,
    get_spaces,
    remove_contributor,
    remove_moment_from_space,
    update_space,
)
from tailless.api.deps import get_auth, json_body, respond, with_id
from tailless.core import messages
from tailless.core.response import ApiResponse, HttpStatus
from tailless.storage import get_db

router = APIRouter(prefix="/spaces", tags=["spaces"])


def _field(body: Any, name: str, default: Any = None) -> Any:
    return body.get(name, default) if isinstance(body, dict) else default


@router.post("")
async def create(
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await create_space(db, auth, body))


@router.get("")
async def list_spaces(
    title: str | None = None,
    tags: list[str] | None = Query(None),
    contributors: list[str] | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    payload = {"title": title, "tags": tags, "contributors": contributors}
    return respond(await get_spaces(db, payload))


@router.get("/{space_id}")
async def read(space_id: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    return respond(await get_space(db, {"id": space_id}))


@router.patch("/{space_id}")
async def update(
    space_id: str,
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await update_space(db, auth, with_id(body, space_id)))


@router.delete("/{space_id}")
async def delete(
    space_id: str,
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await delete_space(db, auth, {"id": space_id}))


@router.post("/{space_id}/moments/{moment_id}")
async def add_moment(
    space_id: str,
    moment_id: str,
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await add_moment_to_space(db, auth, space_id, moment_id))


@router.delete("/{space_id}/moments/{moment_id}")
async def remove_moment(
    space_id: str,
    moment_id: str,
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await remove_moment_from_space(db, auth, space_id, moment_id))


@router.post("/{space_id}/contributors")
async def add_space_contributor(
    space_id: str,
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    user_id = _field(body, "userId")
    if user_id is not None and not isinstance(user_id, str):
        return respond(ApiResponse.failure(HttpStatus.BAD_REQUEST, messages.INVALID_INPUT))
    return respond(await add_contributor(db, auth, space_id, user_id))


@router.delete("/{space_id}/contributors/me")
async def leave_space(
    space_id: str,
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await remove_contributor(db, auth, space_id))


@router.post("/{space_id}/tags")
async def add_space_tags(
    space_id: str,
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await add_tags(db, auth, space_id, _field(body, "tags")))


@router.delete("/{space_id}/tags")
async def delete_space_tags(
    space_id: str,
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Delete the listed tags, or every tag when ``tags`` is omitted."""
    tags = _field(body, "tags")
    if tags is None:
        return respond(await delete_all_tags(db, auth, space_id))
    return respond(await delete_tags(db, auth, space_id, tags))
