"""Server-side AI assist over a block-versioned draft."""

from collections.abc import Sequence

from tailless.ai.prompts import AiAction
from tailless.ai.results import AiResult
from tailless.ai.text import generate_ai_text
from tailless.core.editor import Block, run_assist
from tailless.llm import GenerationOptions
from tailless.logging import get_logger

logger = get_logger(__name__)


class BlockNotFoundError(LookupError):
    def __init__(self, block_id: str):
        super().__init__(f"No block {block_id} in draft")
        self.block_id = block_id


class AssistResult(AiResult):
    blocks: list[Block]


async def assist_block(
    blocks: list[Block],
    block_id: str,
    action: AiAction,
    knowledge: Sequence[str] = (),
    options: GenerationOptions | None = None,
) -> AssistResult:
    """Run ``action`` on one block of ``blocks``.

    On success the block gains a new selected version; on failure the draft
    comes back unchanged alongside the error. Raises ``BlockNotFoundError``
    and ``BlockBusyError`` for requests that cannot start a cycle.
    """
    block = next((b for b in blocks if b.id == block_id), None)
    if block is None:
        raise BlockNotFoundError(block_id)

    failure: AiResult | None = None

    async def generate(content: str) -> str | None:
        nonlocal failure
        result = await generate_ai_text(content, action, knowledge, options)
        if not result.ok:
            failure = result
            return None
        return result.text

    version = await run_assist(block, generate)
    if version is None:
        return AssistResult(
            status="error", error=failure.error, disabled=failure.disabled, blocks=blocks
        )

    logger.info(f"Assist {AiAction(action).value} on block {block_id}: version {version.id}")
    return AssistResult(blocks=blocks)
