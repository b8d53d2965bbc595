"""Single-text AI actions: rewrite-style generation and keyword extraction."""

from collections.abc import Sequence

from tailless.ai.prompts import EDITOR, AiAction, action_prompts, build_system_prompt
from tailless.ai.results import KeywordsResult, TextResult
from tailless.core import messages
from tailless.llm import GenerationOptions, LLMDisabledError, LLMError, generate_text
from tailless.logging import get_logger

logger = get_logger(__name__)


async def generate_ai_text(
    content: str,
    action: AiAction | str,
    knowledge: Sequence[str] = (),
    options: GenerationOptions | None = None,
) -> TextResult:
    """Run one writing action over ``content``.

    Only the presence of text is checked; an empty reply counts as failure.
    """
    options = options or GenerationOptions()
    system_prompt, user_prompt = action_prompts(AiAction(action), content, knowledge)

    try:
        text = await generate_text(
            system_prompt,
            user_prompt,
            max_tokens=options.max_tokens,
            temperature=options.temperature,
            presence_penalty=options.presence,
            frequency_penalty=options.frequency,
        )
    except LLMDisabledError as e:
        logger.warning(f"AI text ({action}) skipped: {e}")
        return TextResult.failed(messages.AI_DISABLED, disabled=True)
    except LLMError as e:
        logger.error(f"AI text ({action}) failed: {e}")
        return TextResult.failed(messages.AI_TEXT_FAILED)

    text = text.strip()
    if not text:
        logger.warning(f"AI text ({action}) returned nothing")
        return TextResult.failed(messages.AI_TEXT_FAILED)

    return TextResult(text=text)


async def extract_keywords(content: str, limit: int = 5) -> KeywordsResult:
    """Comma-separated keyword extraction, at most ``limit`` keywords."""
    system_prompt = build_system_prompt(
        EDITOR,
        refine=(
            f"주어진 내용에서 핵심 키워드를 {limit}개 이내로 추출해주세요.",
            "키워드는 쉼표(,)로 구분하여 반환해주세요.",
            "앞뒤 공백은 제거해주세요.",
        ),
    )
    user_prompt = f"다음 내용에서 핵심 키워드를 추출해주세요:\n\n{content}"

    try:
        text = await generate_text(system_prompt, user_prompt, max_tokens=256)
    except LLMDisabledError as e:
        logger.warning(f"Keyword extraction skipped: {e}")
        return KeywordsResult.failed(messages.AI_DISABLED, disabled=True)
    except LLMError as e:
        logger.error(f"Keyword extraction failed: {e}")
        return KeywordsResult.failed(messages.AI_KEYWORDS_FAILED)

    keywords = [keyword.strip() for keyword in text.split(",") if keyword.strip()]
    if not keywords:
        return KeywordsResult.failed(messages.AI_KEYWORDS_FAILED)

    return KeywordsResult(keywords=keywords[:limit])
