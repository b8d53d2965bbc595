"""LLM adapter for text and structured generation: OpenAI and Anthropic APIs."""

import asyncio
import json
import re
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from tailless.config import config
from tailless.logging import get_logger

logger = get_logger(__name__)

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"
ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
BASE_BACKOFF = 1.0

M = TypeVar("M", bound=BaseModel)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class LLMDisabledError(Exception):
    """Raised when LLM is disabled but generation is attempted."""

    pass


class LLMError(Exception):
    """Base exception for LLM API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LLMRateLimitError(LLMError):
    """Rate limit exceeded."""

    def __init__(self, retry_after: int | None = None):
        super().__init__("Rate limit exceeded", status_code=429)
        self.retry_after = retry_after


class LLMSchemaError(LLMError):
    """Model output did not parse as the requested object."""


def _error_message(response: httpx.Response) -> str:
    try:
        error_data = response.json()
        return error_data.get("error", {}).get("message", f"HTTP {response.status_code}")
    except (ValueError, AttributeError):
        return f"HTTP {response.status_code}"


def _retry_after(response: httpx.Response) -> int | None:
    value = response.headers.get("retry-after")
    return int(value) if value and value.isdigit() else None


async def _call_openai(
    client: httpx.AsyncClient,
    system_prompt: str,
    user_prompt: str,
    max_tokens: int,
    temperature: float,
    presence_penalty: float,
    frequency_penalty: float,
) -> str:
    """Call OpenAI-compatible API."""
    headers = {
        "Authorization": f"Bearer {config.openai_api_key}",
        "Content-Type": "application/json",
    }
    payload = {
        "model": config.openai_model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "max_tokens": max_tokens,
        "temperature": temperature,
        # OpenAI accepts [-2, 2]; the option range [-1, 1] is scaled up.
        "presence_penalty": presence_penalty * 2,
        "frequency_penalty": frequency_penalty * 2,
    }

    response = await client.post(OPENAI_API_URL, headers=headers, json=payload)

    if response.status_code == 200:
        try:
            data = response.json()
            choices = data.get("choices", [])
            content = choices[0].get("message", {}).get("content") if choices else None
            total_tokens = (data.get("usage") or {}).get("total_tokens", "N/A")
        except (ValueError, AttributeError, TypeError, KeyError) as e:
            raise LLMError(
                "Malformed response from OpenAI", status_code=response.status_code
            ) from e
        if not choices:
            raise LLMError("Empty response from OpenAI")
        logger.debug(f"OpenAI tokens: {total_tokens}")
        return str(content or "").strip()

    if response.status_code == 429:
        raise LLMRateLimitError(retry_after=_retry_after(response))

    if response.status_code >= 500:
        raise LLMError(
            f"Server error: {response.status_code}",
            status_code=response.status_code,
        )

    raise LLMError(_error_message(response), status_code=response.status_code)


async def _call_anthropic(
    client: httpx.AsyncClient,
    system_prompt: str,
    user_prompt: str,
    max_tokens: int,
    temperature: float,
    presence_penalty: float,
    frequency_penalty: float,
) -> str:
    """Call Anthropic Messages API. Penalties have no equivalent and are ignored."""
    headers = {
        "x-api-key": config.anthropic_api_key,
        "anthropic-version": "2023-06-01",
        "Content-Type": "application/json",
    }
    payload = {
        "model": config.anthropic_model,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "system": system_prompt,
        "messages": [
            {"role": "user", "content": user_prompt},
        ],
    }

    response = await client.post(ANTHROPIC_API_URL, headers=headers, json=payload)

    if response.status_code == 200:
        try:
            data = response.json()
            text_parts = [
                block.get("text", "")
                for block in data.get("content", [])
                if block.get("type") == "text"
            ]
            result = "\n".join(text_parts).strip()
            usage = data.get("usage") or {}
        except (ValueError, AttributeError, TypeError) as e:
            raise LLMError(
                "Malformed response from Anthropic", status_code=response.status_code
            ) from e
        logger.debug(
            f"Anthropic tokens: in={usage.get('input_tokens', '?')}, "
            f"out={usage.get('output_tokens', '?')}"
        )
        return result

    if response.status_code == 429:
        raise LLMRateLimitError(retry_after=_retry_after(response))

    if response.status_code >= 500:
        raise LLMError(
            f"Anthropic server error: {response.status_code}",
            status_code=response.status_code,
        )

    raise LLMError(_error_message(response), status_code=response.status_code)


async def generate_text(
    system_prompt: str,
    user_prompt: str,
    *,
    max_tokens: int = 1024,
    temperature: float = 0.0,
    presence_penalty: float = 0.0,
    frequency_penalty: float = 0.0,
) -> str:
    """Generate text using configured LLM provider.

    Args:
        system_prompt: System instructions for the model
        user_prompt: User message/request
        max_tokens: Maximum tokens in response
        temperature: Sampling temperature in [0, 1]
        presence_penalty: Presence penalty in [-1, 1]
        frequency_penalty: Frequency penalty in [-1, 1]

    Returns:
        Generated text, stripped

    Raises:
        LLMDisabledError: If LLM is disabled or the provider key is missing
        LLMError: On API error after retries exhausted
    """
    if not config.llm_enabled:
        raise LLMDisabledError("LLM is disabled in configuration")

    provider = config.llm_provider

    if provider == "anthropic":
        if not config.anthropic_api_key:
            raise LLMDisabledError("ANTHROPIC_API_KEY is not configured")
        call_fn = _call_anthropic
        provider_label = f"Anthropic/{config.anthropic_model}"
    else:
        if not config.openai_api_key:
            raise LLMDisabledError("OPENAI_API_KEY is not configured")
        call_fn = _call_openai
        provider_label = f"OpenAI/{config.openai_model}"

    max_retries = config.llm_max_retries
    last_error: Exception | None = None

    async with httpx.AsyncClient(timeout=config.llm_timeout_seconds) as client:
        for attempt in range(max_retries):
            try:
                return await call_fn(
                    client,
                    system_prompt,
                    user_prompt,
                    max_tokens,
                    temperature,
                    presence_penalty,
                    frequency_penalty,
                )

            except LLMRateLimitError as e:
                wait_time = e.retry_after or (BASE_BACKOFF * (2 ** attempt))
                logger.warning(
                    f"{provider_label} rate limited, retry after {wait_time}s "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                last_error = e

            except LLMError as e:
                if not (e.status_code and e.status_code >= 500):
                    raise
                wait_time = BASE_BACKOFF * (2 ** attempt)
                logger.warning(
                    f"{provider_label} server error, retry in {wait_time}s "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                last_error = e

            except httpx.TimeoutException as e:
                wait_time = BASE_BACKOFF * (2 ** attempt)
                logger.warning(
                    f"{provider_label} timeout, retry in {wait_time}s "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                last_error = e

            except httpx.RequestError as e:
                wait_time = BASE_BACKOFF * (2 ** attempt)
                logger.warning(
                    f"{provider_label} request error: {e}, retry in {wait_time}s "
                    f"(attempt {attempt + 1}/{max_retries})"
                )
                last_error = e

            if attempt < max_retries - 1:
                await asyncio.sleep(wait_time)

    logger.error(f"{provider_label} failed after {max_retries} attempts: {last_error}")
    raise LLMError(f"Max retries exceeded ({provider_label}): {last_error}")


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text.strip())
    return match.group(1) if match else text.strip()


def _object_instructions(schema: type[BaseModel]) -> str:
    return (
        "Respond with a single JSON object and nothing else. "
        "It must validate against this JSON schema:\n\n"
        f"{json.dumps(schema.model_json_schema(), ensure_ascii=False)}"
    )


async def generate_object(
    prompt: str,
    schema: type[M],
    *,
    system_prompt: str | None = None,
    max_tokens: int = 1024,
    temperature: float = 0.0,
) -> M:
    """Generate a JSON object and validate it against ``schema``.

    The schema is embedded in the system prompt. Output that is not valid
    JSON, or does not satisfy the schema, raises ``LLMSchemaError``; it is
    never repaired.
    """
    instructions = _object_instructions(schema)
    full_system = f"{system_prompt}\n\n{instructions}" if system_prompt else instructions

    raw = await generate_text(
        full_system,
        prompt,
        max_tokens=max_tokens,
        temperature=temperature,
    )

    try:
        return schema.model_validate_json(_strip_code_fence(raw))
    except ValidationError as e:
        logger.warning(f"{schema.__name__} output rejected: {e.error_count()} error(s)")
        raise LLMSchemaError(f"Output does not match {schema.__name__}: {e}") from e
