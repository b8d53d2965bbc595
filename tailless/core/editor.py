"""Block-versioned draft model and the per-block AI assist cycle.

A draft is a list of blocks, one per line. Each block keeps every version
it has had; ``current_version`` selects the one shown. An assist run moves
a block ``view -> generating`` and back; success appends and selects a new
version, failure leaves the block as it was.
"""

import uuid
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum

from pydantic import Field, model_validator

from tailless.core.schemas import WireModel
from tailless.logging import get_logger

logger = get_logger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class BlockStatus(str, Enum):
    VIEW = "view"
    GENERATING = "generating"


class BlockBusyError(Exception):
    """Assist was triggered on a block that is already generating."""

    def __init__(self, block_id: str):
        super().__init__(f"Block {block_id} is already generating")
        self.block_id = block_id


class BlockContent(WireModel):
    id: str = Field(default_factory=_new_id)
    content: str


class Block(WireModel):
    id: str = Field(default_factory=_new_id)
    current_version: str
    versions: dict[str, BlockContent]
    status: BlockStatus = BlockStatus.VIEW

    @model_validator(mode="after")
    def _current_version_exists(self) -> "Block":
        if self.current_version not in self.versions:
            raise ValueError(f"current version {self.current_version} is not among versions")
        return self

    @classmethod
    def from_text(cls, content: str) -> "Block":
        version = BlockContent(content=content)
        return cls(current_version=version.id, versions={version.id: version})

    @property
    def current(self) -> BlockContent:
        return self.versions[self.current_version]


def content_to_blocks(content: str) -> list[Block]:
    """Split text on newlines, one block per line."""
    return [Block.from_text(line) for line in content.split("\n")]


def blocks_to_content(blocks: Sequence[Block]) -> str:
    return "\n".join(block.current.content for block in blocks)


def begin_assist(block: Block) -> None:
    if block.status == BlockStatus.GENERATING:
        raise BlockBusyError(block.id)
    block.status = BlockStatus.GENERATING


def complete_assist(block: Block, text: str) -> BlockContent:
    version = BlockContent(content=text)
    block.versions[version.id] = version
    block.current_version = version.id
    block.status = BlockStatus.VIEW
    return version


def fail_assist(block: Block) -> None:
    block.status = BlockStatus.VIEW


async def run_assist(
    block: Block, generate: Callable[[str], Awaitable[str | None]]
) -> BlockContent | None:
    """One full assist cycle on ``block``.

    ``generate`` receives the current content and returns the new text, or
    None on failure. Raises ``BlockBusyError`` if the block is mid-cycle.
    """
    begin_assist(block)
    try:
        text = await generate(block.current.content)
    except BaseException:
        fail_assist(block)
        raise

    if text is None:
        fail_assist(block)
        logger.info(f"Assist on block {block.id} failed, content kept")
        return None

    return complete_assist(block, text)
