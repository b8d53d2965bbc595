"""Tests for prompt construction and the single-call AI actions."""

from unittest.mock import AsyncMock, patch

import pytest

from tailless.ai import (
    AiAction,
    build_system_prompt,
    calculate_similarities,
    calculate_similarity,
    extract_keywords,
    generate_ai_text,
    generate_tags,
)
from tailless.ai.prompts import PROOFREADER, WRITER, action_prompts
from tailless.ai.results import SimilarityScore
from tailless.ai.tags import tags_schema
from tailless.core import messages
from tailless.llm import GenerationOptions, LLMDisabledError, LLMError, LLMSchemaError


class TestPrompts:
    def test_role_only(self):
        prompt = build_system_prompt(WRITER, refine=())
        assert prompt == f"당신은 {WRITER.name}입니다. {WRITER.description}"

    def test_knowledge_and_refine_blocks(self):
        prompt = build_system_prompt(WRITER, ["배경1", "배경2"], ["정리1"])
        parts = prompt.split("\n\n")
        assert parts[0].startswith("당신은 창의적인 작가입니다.")
        assert parts[1] == "당신은 이러한 배경 지식을 가지고 있습니다."
        assert parts[2] == "배경1\n배경2"
        assert parts[3] == "결과물을 반환하기 이전, 다음과 같은 후처리 작업이 필요합니다."
        assert parts[4] == "정리1"

    def test_default_refinements_applied(self):
        prompt = build_system_prompt(WRITER)
        assert "순수한 결과물만 반환해주세요." in prompt

    def test_action_prompts(self):
        system, user = action_prompts(AiAction.SPELLCHECK, "안녕 하세요")
        assert system.startswith(f"당신은 {PROOFREADER.name}입니다.")
        assert user == "다음 텍스트의 맞춤법을 교정해주세요:\n\n안녕 하세요"

    def test_every_action_has_prompts(self):
        for action in AiAction:
            system, user = action_prompts(action, "본문 {braces}")
            assert system
            assert user.endswith("본문 {braces}")


class TestGenerateAiText:
    @pytest.mark.anyio
    async def test_success_trims(self):
        gen = AsyncMock(return_value="  고친 문장  ")
        with patch("tailless.ai.text.generate_text", gen):
            result = await generate_ai_text(
                "고칠 문장", "spellcheck", ["지식"], GenerationOptions(temperature="creative")
            )

        assert result.ok
        assert result.to_dict() == {"status": "success", "text": "고친 문장"}
        assert gen.await_args.kwargs["temperature"] == 1.0
        assert "지식" in gen.await_args.args[0]

    @pytest.mark.anyio
    async def test_empty_text_is_error(self):
        with patch("tailless.ai.text.generate_text", AsyncMock(return_value="   ")):
            result = await generate_ai_text("x", AiAction.SUMMARIZE)

        assert result.to_dict() == {"status": "error", "error": messages.AI_TEXT_FAILED}

    @pytest.mark.anyio
    async def test_upstream_failure_is_error(self):
        with patch("tailless.ai.text.generate_text", AsyncMock(side_effect=LLMError("down"))):
            result = await generate_ai_text("x", AiAction.REWRITE)

        assert not result.ok
        assert result.disabled is False

    @pytest.mark.anyio
    async def test_disabled_is_flagged(self):
        with patch(
            "tailless.ai.text.generate_text", AsyncMock(side_effect=LLMDisabledError("off"))
        ):
            result = await generate_ai_text("x", AiAction.REWRITE)

        assert result.error == messages.AI_DISABLED
        assert result.disabled is True
        assert "disabled" not in result.to_dict()


class TestExtractKeywords:
    @pytest.mark.anyio
    async def test_splits_and_trims(self):
        with patch(
            "tailless.ai.text.generate_text", AsyncMock(return_value=" 여행 , 음식,, 사진 ")
        ):
            result = await extract_keywords("본문")

        assert result.keywords == ["여행", "음식", "사진"]

    @pytest.mark.anyio
    async def test_limit(self):
        with patch("tailless.ai.text.generate_text", AsyncMock(return_value="a,b,c,d")):
            result = await extract_keywords("본문", limit=2)

        assert result.keywords == ["a", "b"]


class TestGenerateTags:
    def test_schema_bounds(self):
        schema = tags_schema(1, 2)
        assert schema.model_validate({"tags": ["a", "b"]}).tags == ["a", "b"]
        with pytest.raises(ValueError):
            schema.model_validate({"tags": []})
        with pytest.raises(ValueError):
            schema.model_validate({"tags": ["a", "b", "c"]})

    @pytest.mark.anyio
    async def test_success(self):
        schema = tags_schema(1, 5)
        gen = AsyncMock(return_value=schema(tags=["여행", "맛집"]))
        with patch("tailless.ai.tags.generate_object", gen):
            result = await generate_tags("본문", max_tags=5)

        assert result.tags == ["여행", "맛집"]
        assert "1개 이상 5개 이하" in gen.await_args.args[0]

    @pytest.mark.anyio
    async def test_schema_failure_is_error(self):
        with patch(
            "tailless.ai.tags.generate_object", AsyncMock(side_effect=LLMSchemaError("bad"))
        ):
            result = await generate_tags("본문")

        assert result.to_dict() == {"status": "error", "error": messages.AI_TAGS_FAILED}

    @pytest.mark.anyio
    async def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            await generate_tags("본문", min_tags=3, max_tags=2)


class TestSimilarity:
    @pytest.mark.anyio
    async def test_single(self):
        from tailless.ai.similarity import _Similarity

        with patch(
            "tailless.ai.similarity.generate_object",
            AsyncMock(return_value=_Similarity(similarity=0.7)),
        ):
            result = await calculate_similarity("a", "b")

        assert result.to_dict() == {"status": "success", "similarity": 0.7}

    @pytest.mark.anyio
    async def test_batched(self):
        from tailless.ai.similarity import _Similarities

        scores = [SimilarityScore(content="여행", target="Travel", similarity=0.9)]
        gen = AsyncMock(return_value=_Similarities(similarities=scores))
        with patch("tailless.ai.similarity.generate_object", gen):
            result = await calculate_similarities(["여행", "음식"], ["Travel"])

        assert result.similarities == scores
        prompt = gen.await_args.args[0]
        assert "# 그룹 content:\n여행\n음식" in prompt
        assert "# 그룹 target:\nTravel" in prompt

    @pytest.mark.anyio
    async def test_batched_empty_side_skips_call(self):
        gen = AsyncMock()
        with patch("tailless.ai.similarity.generate_object", gen):
            result = await calculate_similarities(["a"], [])

        assert result.similarities == []
        gen.assert_not_awaited()

    @pytest.mark.anyio
    async def test_failure(self):
        with patch(
            "tailless.ai.similarity.generate_object", AsyncMock(side_effect=LLMError("x"))
        ):
            result = await calculate_similarity("a", "b")

        assert result.error == messages.AI_SIMILARITY_FAILED
