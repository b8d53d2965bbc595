"""Tests for the block model and the AI assist cycle."""

from unittest.mock import AsyncMock, patch

import anyio
import pytest

from tailless.ai import AiAction, BlockNotFoundError, assist_block
from tailless.ai.results import TextResult
from tailless.core import messages
from tailless.core.editor import (
    Block,
    BlockBusyError,
    BlockStatus,
    begin_assist,
    blocks_to_content,
    content_to_blocks,
    run_assist,
)


class TestConversion:
    def test_split_on_newlines(self):
        blocks = content_to_blocks("첫 줄\n둘째 줄\n")
        assert [b.current.content for b in blocks] == ["첫 줄", "둘째 줄", ""]
        assert len({b.id for b in blocks}) == 3

    def test_join_uses_current_version(self):
        blocks = content_to_blocks("a\nb")
        blocks[1].versions["v2"] = blocks[1].current.model_copy(update={"id": "v2", "content": "B"})
        blocks[1].current_version = "v2"
        assert blocks_to_content(blocks) == "a\nB"

    def test_text_survives_conversion(self):
        text = "one\n\nthree"
        assert blocks_to_content(content_to_blocks(text)) == text

    def test_wire_shape(self):
        block = Block.from_text("x")
        dumped = block.model_dump(by_alias=True, mode="json")
        assert set(dumped) == {"id", "currentVersion", "versions", "status"}
        assert dumped["status"] == "view"

    def test_current_version_must_exist(self):
        with pytest.raises(ValueError):
            Block(current_version="missing", versions={})


class TestAssistCycle:
    @pytest.mark.anyio
    async def test_success_appends_and_selects_version(self):
        block = Block.from_text("before")
        original = block.current_version

        version = await run_assist(block, AsyncMock(return_value="after"))

        assert block.status == BlockStatus.VIEW
        assert block.current_version == version.id != original
        assert block.current.content == "after"
        assert block.versions[original].content == "before"

    @pytest.mark.anyio
    async def test_failure_keeps_content(self):
        block = Block.from_text("before")

        assert await run_assist(block, AsyncMock(return_value=None)) is None

        assert block.status == BlockStatus.VIEW
        assert block.current.content == "before"
        assert len(block.versions) == 1

    @pytest.mark.anyio
    async def test_exception_resets_status(self):
        block = Block.from_text("before")

        with pytest.raises(RuntimeError):
            await run_assist(block, AsyncMock(side_effect=RuntimeError("boom")))

        assert block.status == BlockStatus.VIEW

    @pytest.mark.anyio
    async def test_concurrent_trigger_rejected(self):
        block = Block.from_text("before")
        release = anyio.Event()

        async def slow(content):
            await release.wait()
            return "after"

        async with anyio.create_task_group() as tg:
            tg.start_soon(run_assist, block, slow)
            await anyio.sleep(0)
            assert block.status == BlockStatus.GENERATING
            with pytest.raises(BlockBusyError):
                await run_assist(block, AsyncMock(return_value="other"))
            release.set()

        assert block.current.content == "after"
        assert len(block.versions) == 2

    def test_begin_on_busy_block(self):
        block = Block.from_text("x")
        begin_assist(block)
        with pytest.raises(BlockBusyError):
            begin_assist(block)


class TestAssistBlock:
    @pytest.mark.anyio
    async def test_success(self):
        blocks = content_to_blocks("a\nb")
        with patch(
            "tailless.ai.assist.generate_ai_text",
            AsyncMock(return_value=TextResult(text="B!")),
        ):
            result = await assist_block(blocks, blocks[1].id, AiAction.REWRITE)

        assert result.ok
        assert blocks_to_content(result.blocks) == "a\nB!"

    @pytest.mark.anyio
    async def test_error_returns_unchanged_draft(self):
        blocks = content_to_blocks("a\nb")
        with patch(
            "tailless.ai.assist.generate_ai_text",
            AsyncMock(return_value=TextResult.failed(messages.AI_TEXT_FAILED)),
        ):
            result = await assist_block(blocks, blocks[0].id, AiAction.REWRITE)

        assert result.to_dict()["status"] == "error"
        assert result.error == messages.AI_TEXT_FAILED
        assert blocks_to_content(result.blocks) == "a\nb"

    @pytest.mark.anyio
    async def test_unknown_block(self):
        with pytest.raises(BlockNotFoundError):
            await assist_block(content_to_blocks("a"), "missing", AiAction.REWRITE)
