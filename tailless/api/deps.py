"""Request dependencies and envelope-to-HTTP mapping."""

import secrets
from typing import Any

from fastapi import Header, Request
from fastapi.responses import JSONResponse

from tailless.actions.auth import AuthContext
from tailless.ai.results import AiResult
from tailless.config import config
from tailless.core import messages
from tailless.core.response import ApiResponse, HttpStatus
from tailless.logging import get_logger

logger = get_logger(__name__)


async def get_auth(
    request: Request,
    authorization: str | None = Header(None, alias="Authorization"),
) -> AuthContext:
    """Session token from ``Authorization`` (Bearer or bare) or the session cookie."""
    token = None
    if authorization:
        token = authorization
        if authorization.startswith("Bearer "):
            token = authorization[7:]
    if not token:
        token = request.cookies.get(config.session_cookie_name)
    return AuthContext(token=token or None)


async def json_body(request: Request) -> Any:
    """Raw JSON body, or None when absent or malformed.

    Validation happens in the actions so every rejection uses the envelope.
    """
    raw = await request.body()
    if not raw:
        return None
    try:
        return await request.json()
    except ValueError:
        logger.info(f"Malformed JSON body on {request.url.path}")
        return None


def check_identity_secret(presented: str | None) -> ApiResponse | None:
    """Failure response if the identity relay secret is missing or wrong."""
    expected = config.identity_provider_secret
    if not expected:
        return ApiResponse.failure(HttpStatus.SERVICE_UNAVAILABLE, messages.SIGNIN_DISABLED)
    if not presented or not secrets.compare_digest(presented, expected):
        return ApiResponse.failure(HttpStatus.UNAUTHORIZED, messages.UNAUTHORIZED)
    return None


def with_id(body: Any, resource_id: str) -> Any:
    """Merge a path ID into a JSON object body; other bodies pass through."""
    if body is None:
        return {"id": resource_id}
    if isinstance(body, dict):
        return {**body, "id": resource_id}
    return body


def respond(result: ApiResponse) -> JSONResponse:
    return JSONResponse(status_code=result.status, content=result.to_dict())


def respond_ai(result: AiResult) -> JSONResponse:
    if result.ok:
        status_code = HttpStatus.OK
    elif result.disabled:
        status_code = HttpStatus.SERVICE_UNAVAILABLE
    else:
        status_code = HttpStatus.BAD_GATEWAY
    return JSONResponse(status_code=status_code, content=result.to_dict())
