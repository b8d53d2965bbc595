"""LLM module for AI integrations."""

from tailless.llm.llm_adapter import (
    LLMDisabledError,
    LLMError,
    LLMRateLimitError,
    LLMSchemaError,
    generate_object,
    generate_text,
)
from tailless.llm.options import GenerationOptions

__all__ = [
    "generate_text",
    "generate_object",
    "GenerationOptions",
    "LLMDisabledError",
    "LLMError",
    "LLMRateLimitError",
    "LLMSchemaError",
]
