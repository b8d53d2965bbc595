"""User endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions import AuthContext, get_user, get_users
from tailless.api.deps import get_auth, respond
from tailless.storage import get_db

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(
    name: str | None = None,
    email: str | None = None,
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await get_users(db, auth, {"name": name, "email": email}))


@router.get("/{user_id}")
async def read_user(user_id: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    return respond(await get_user(db, user_id))
