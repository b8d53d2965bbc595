"""Structured tag generation."""

from pydantic import BaseModel, Field, create_model

from tailless.ai.results import TagsResult
from tailless.core import messages
from tailless.llm import LLMDisabledError, LLMError, generate_object
from tailless.logging import get_logger

logger = get_logger(__name__)


def tags_schema(min_tags: int, max_tags: int) -> type[BaseModel]:
    """``{tags: string[]}`` with the count bounded to [min_tags, max_tags]."""
    return create_model(
        "GeneratedTags",
        tags=(list[str], Field(min_length=min_tags, max_length=max_tags)),
    )


async def generate_tags(content: str, *, min_tags: int = 1, max_tags: int = 5) -> TagsResult:
    if min_tags < 1 or max_tags < min_tags:
        raise ValueError(f"invalid tag bounds [{min_tags}, {max_tags}]")

    prompt = f"다음 텍스트에서 적절한 태그를 {min_tags}개 이상 {max_tags}개 이하로 추출해주세요:\n\n{content}"

    try:
        generated = await generate_object(prompt, tags_schema(min_tags, max_tags))
    except LLMDisabledError as e:
        logger.warning(f"Tag generation skipped: {e}")
        return TagsResult.failed(messages.AI_DISABLED, disabled=True)
    except LLMError as e:
        logger.error(f"Tag generation failed: {e}")
        return TagsResult.failed(messages.AI_TAGS_FAILED)

    return TagsResult(tags=generated.tags)
