"""Moment endpoints."""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions import (
    AuthContext,
    create_moment,
    delete_moment,
    get_moment,
    get_moments,
    update_moment,
)
from tailless.api.deps import get_auth, json_body, respond, with_id
from tailless.storage import get_db

router = APIRouter(prefix="/moments", tags=["moments"])


@router.post("")
async def create(
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await create_moment(db, auth, body))


@router.get("")
async def list_moments(
    title: str | None = None,
    author: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await get_moments(db, {"title": title, "author": author}))


@router.get("/{moment_id}")
async def read(moment_id: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    return respond(await get_moment(db, {"id": moment_id}))


@router.patch("/{moment_id}")
async def update(
    moment_id: str,
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await update_moment(db, auth, with_id(body, moment_id)))


@router.delete("/{moment_id}")
async def delete(
    moment_id: str,
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await delete_moment(db, auth, {"id": moment_id}))
