"""Session endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions import AuthContext, authorize_user, sign_in, sign_out
from tailless.api.deps import check_identity_secret, get_auth, json_body, respond
from tailless.config import config
from tailless.storage import get_db

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/session")
async def create_session(
    body: Any = Depends(json_body),
    identity_secret: str | None = Header(None, alias="X-Identity-Secret"),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Sign in with a profile relayed by the trusted identity provider."""
    denied = check_identity_secret(identity_secret)
    if denied is not None:
        return respond(denied)

    result = await sign_in(db, body)
    response = respond(result)
    if result.ok:
        response.set_cookie(
            config.session_cookie_name,
            result.data.token,
            max_age=config.session_max_age_seconds,
            httponly=True,
            samesite="lax",
        )
    return response


@router.delete("/session")
async def delete_session(
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    result = await sign_out(db, auth)
    response = respond(result)
    if result.ok:
        response.delete_cookie(config.session_cookie_name)
    return response


@router.get("/me")
async def me(
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    return respond(await authorize_user(db, auth))
