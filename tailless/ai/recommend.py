"""Space recommendation for a piece of content.

Pipeline: extract tags from the content, fetch every Space, score each tag
against each Space title in one batched call, then keep the pairs at or
above the threshold. Spaces keep their fetched order and tags keep their
extracted order; nothing is re-sorted.
"""

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from tailless.actions.spaces import get_spaces
from tailless.ai.results import Recommendation, RecommendResult, SimilarityScore, TagScore
from tailless.ai.similarity import calculate_similarities
from tailless.ai.tags import generate_tags
from tailless.config import config
from tailless.core import messages, schemas
from tailless.logging import get_logger

logger = get_logger(__name__)


def score_spaces(
    tags: Sequence[str],
    spaces: Sequence[schemas.Space],
    similarities: Sequence[SimilarityScore],
    threshold: float,
) -> list[Recommendation]:
    """Pure aggregation step; a pair the model did not score counts as 0."""
    lookup: dict[tuple[str, str], float] = {}
    for score in similarities:
        lookup.setdefault((score.content, score.target), score.similarity)

    recommendations = []
    for space in spaces:
        tag_scores = []
        for tag in tags:
            similarity = lookup.get((tag, space.title), 0.0)
            if similarity >= threshold:
                tag_scores.append(TagScore(tag=tag, similarity=similarity))
        if tag_scores:
            recommendations.append(Recommendation(space_id=space.id, tag_scores=tag_scores))
    return recommendations


async def recommend_spaces(
    db: AsyncSession,
    content: str,
    *,
    max_tags: int | None = None,
    threshold: float | None = None,
) -> RecommendResult:
    max_tags = config.recommend_max_tags if max_tags is None else max_tags
    threshold = config.recommend_similarity_threshold if threshold is None else threshold

    tag_result = await generate_tags(content, max_tags=max_tags)
    if not tag_result.ok:
        return RecommendResult.failed(tag_result.error, disabled=tag_result.disabled)

    spaces_response = await get_spaces(db, {})
    if not spaces_response.ok:
        logger.error(f"Space fetch failed during recommendation: {spaces_response.status}")
        return RecommendResult.failed(messages.SPACES_FETCH_FAILED)

    spaces = spaces_response.data
    similarity_result = await calculate_similarities(
        tag_result.tags, [space.title for space in spaces]
    )
    if not similarity_result.ok:
        return RecommendResult.failed(
            similarity_result.error, disabled=similarity_result.disabled
        )

    recommendations = score_spaces(
        tag_result.tags, spaces, similarity_result.similarities, threshold
    )
    logger.info(
        f"Recommended {len(recommendations)}/{len(spaces)} space(s) "
        f"from {len(tag_result.tags)} tag(s)"
    )
    return RecommendResult(recommendations=recommendations)
