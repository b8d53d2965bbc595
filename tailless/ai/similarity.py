"""Semantic similarity scoring through the LLM."""

from pydantic import BaseModel, Field

from tailless.ai.results import SimilaritiesResult, SimilarityResult, SimilarityScore
from tailless.core import messages
from tailless.llm import LLMDisabledError, LLMError, generate_object
from tailless.logging import get_logger

logger = get_logger(__name__)


class _Similarity(BaseModel):
    similarity: float = Field(ge=0, le=1)


class _Similarities(BaseModel):
    similarities: list[SimilarityScore]


async def calculate_similarity(content: str, target: str) -> SimilarityResult:
    prompt = f"다음 두 텍스트의 유사도를 계산해주세요:\n\n텍스트 1: {content}\n\n텍스트 2: {target}"

    try:
        scored = await generate_object(prompt, _Similarity)
    except LLMDisabledError as e:
        logger.warning(f"Similarity skipped: {e}")
        return SimilarityResult.failed(messages.AI_DISABLED, disabled=True)
    except LLMError as e:
        logger.error(f"Similarity failed: {e}")
        return SimilarityResult.failed(messages.AI_SIMILARITY_FAILED)

    return SimilarityResult(similarity=scored.similarity)


async def calculate_similarities(contents: list[str], targets: list[str]) -> SimilaritiesResult:
    """Score every (content, target) pair in one request.

    The model may omit pairs; callers treat a missing pair as 0.
    """
    if not contents or not targets:
        return SimilaritiesResult(similarities=[])

    prompt = (
        "다음 두 그룹 간의 각각의 매칭에 대해 유사도를 계산해주세요:\n\n"
        "# 그룹 content:\n" + "\n".join(contents) + "\n\n"
        "# 그룹 target:\n" + "\n".join(targets)
    )

    try:
        scored = await generate_object(prompt, _Similarities, max_tokens=4096)
    except LLMDisabledError as e:
        logger.warning(f"Batched similarity skipped: {e}")
        return SimilaritiesResult.failed(messages.AI_DISABLED, disabled=True)
    except LLMError as e:
        logger.error(f"Batched similarity failed ({len(contents)}x{len(targets)}): {e}")
        return SimilaritiesResult.failed(messages.AI_SIMILARITY_FAILED)

    return SimilaritiesResult(similarities=scored.similarities)
