"""AI endpoints. All require an authenticated user."""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import Field, model_validator
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions import AuthContext, authorize_user
from tailless.ai import (
    AiAction,
    BlockNotFoundError,
    assist_block,
    calculate_similarities,
    calculate_similarity,
    extract_keywords,
    generate_ai_text,
    generate_tags,
    recommend_spaces,
)
from tailless.api.deps import get_auth, json_body, respond, respond_ai
from tailless.core import messages
from tailless.core.editor import Block, BlockBusyError
from tailless.core.response import ApiResponse, HttpStatus
from tailless.core.schemas import WireModel, validate
from tailless.llm import GenerationOptions
from tailless.logging import get_logger
from tailless.storage import get_db

logger = get_logger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


class TextRequest(WireModel):
    content: str
    action: AiAction
    knowledge: list[str] = Field(default_factory=list)
    options: GenerationOptions = Field(default_factory=GenerationOptions)


class KeywordsRequest(WireModel):
    content: str
    limit: int = Field(default=5, ge=1, le=20)


class TagsRequest(WireModel):
    content: str
    min: int = Field(default=1, ge=1)
    max: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def _bounds(self) -> "TagsRequest":
        if self.max < self.min:
            raise ValueError("max must not be below min")
        return self


class SimilarityRequest(WireModel):
    """Single pair when both sides are strings, cross-product when both are lists."""

    content: str | list[str]
    target: str | list[str]

    @model_validator(mode="after")
    def _same_shape(self) -> "SimilarityRequest":
        if isinstance(self.content, str) != isinstance(self.target, str):
            raise ValueError("content and target must both be strings or both lists")
        return self


class RecommendRequest(WireModel):
    content: str


class AssistRequest(WireModel):
    blocks: list[Block]
    block_id: str
    action: AiAction
    knowledge: list[str] = Field(default_factory=list)
    options: GenerationOptions = Field(default_factory=GenerationOptions)


async def _denied(db: AsyncSession, auth: AuthContext) -> JSONResponse | None:
    authorization = await authorize_user(db, auth)
    return None if authorization.ok else respond(authorization)


@router.post("/text")
async def ai_text(
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    denied = await _denied(db, auth)
    if denied is not None:
        return denied
    request = validate(TextRequest, body)
    if not request.ok:
        return respond(request.error)

    data = request.value
    return respond_ai(
        await generate_ai_text(data.content, data.action, data.knowledge, data.options)
    )


@router.post("/keywords")
async def ai_keywords(
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    denied = await _denied(db, auth)
    if denied is not None:
        return denied
    request = validate(KeywordsRequest, body)
    if not request.ok:
        return respond(request.error)

    return respond_ai(await extract_keywords(request.value.content, request.value.limit))


@router.post("/tags")
async def ai_tags(
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    denied = await _denied(db, auth)
    if denied is not None:
        return denied
    request = validate(TagsRequest, body)
    if not request.ok:
        return respond(request.error)

    data = request.value
    return respond_ai(await generate_tags(data.content, min_tags=data.min, max_tags=data.max))


@router.post("/similarity")
async def ai_similarity(
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    denied = await _denied(db, auth)
    if denied is not None:
        return denied
    request = validate(SimilarityRequest, body)
    if not request.ok:
        return respond(request.error)

    data = request.value
    if isinstance(data.content, str):
        return respond_ai(await calculate_similarity(data.content, data.target))
    return respond_ai(await calculate_similarities(data.content, data.target))


@router.post("/recommend")
async def ai_recommend(
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    denied = await _denied(db, auth)
    if denied is not None:
        return denied
    request = validate(RecommendRequest, body)
    if not request.ok:
        return respond(request.error)

    return respond_ai(await recommend_spaces(db, request.value.content))


@router.post("/assist")
async def ai_assist(
    body: Any = Depends(json_body),
    auth: AuthContext = Depends(get_auth),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Run one assist cycle on a block of the submitted draft."""
    denied = await _denied(db, auth)
    if denied is not None:
        return denied
    request = validate(AssistRequest, body)
    if not request.ok:
        return respond(request.error)

    data = request.value
    try:
        result = await assist_block(
            data.blocks, data.block_id, data.action, data.knowledge, data.options
        )
    except BlockNotFoundError:
        return respond(ApiResponse.failure(HttpStatus.NOT_FOUND, messages.AI_BLOCK_NOT_FOUND))
    except BlockBusyError as e:
        logger.info(f"Assist refused: block {e.block_id} busy")
        return respond(ApiResponse.failure(HttpStatus.CONFLICT, messages.AI_BLOCK_BUSY))

    return respond_ai(result)
