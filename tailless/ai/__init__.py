"""AI writing assistance and Space recommendation."""

from tailless.ai.assist import AssistResult, BlockNotFoundError, assist_block
from tailless.ai.prompts import AiAction, Role, build_system_prompt
from tailless.ai.recommend import recommend_spaces, score_spaces
from tailless.ai.results import AiResult
from tailless.ai.similarity import calculate_similarities, calculate_similarity
from tailless.ai.tags import generate_tags
from tailless.ai.text import extract_keywords, generate_ai_text

__all__ = [
    "AiAction",
    "AssistResult",
    "BlockNotFoundError",
    "assist_block",
    "AiResult",
    "Role",
    "build_system_prompt",
    "generate_ai_text",
    "extract_keywords",
    "generate_tags",
    "calculate_similarity",
    "calculate_similarities",
    "recommend_spaces",
    "score_spaces",
]
