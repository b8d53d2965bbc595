"""Typed outcomes of AI operations.

Every AI operation returns ``{status: "success", ...}`` or
``{status: "error", error}``; upstream failures never escape as exceptions.
"""

from typing import Literal

from pydantic import Field

from tailless.core.schemas import WireModel


class AiResult(WireModel):
    status: Literal["success", "error"] = "success"
    error: str | None = None
    # Set when the failure came from the LLM being switched off; not sent on the wire.
    disabled: bool = Field(default=False, exclude=True)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def failed(cls, error: str, *, disabled: bool = False):
        return cls(status="error", error=error, disabled=disabled)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TextResult(AiResult):
    text: str | None = None


class KeywordsResult(AiResult):
    keywords: list[str] | None = None


class TagsResult(AiResult):
    tags: list[str] | None = None


class SimilarityResult(AiResult):
    similarity: float | None = None


class SimilarityScore(WireModel):
    content: str
    target: str
    similarity: float = Field(ge=0, le=1)


class SimilaritiesResult(AiResult):
    similarities: list[SimilarityScore] | None = None


class TagScore(WireModel):
    tag: str
    similarity: float


class Recommendation(WireModel):
    space_id: str
    tag_scores: list[TagScore]


class RecommendResult(AiResult):
    recommendations: list[Recommendation] | None = None
