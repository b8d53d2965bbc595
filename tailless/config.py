"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass
from typing import Literal

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "true" if default else "false")
    return raw.lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    # Server settings
    host: str
    port: int
    database_url: str
    log_level: str

    # Session / identity settings
    identity_provider_secret: str | None
    session_max_age_seconds: int
    session_cookie_name: str
    session_purge_interval_minutes: int

    # OpenAI / LLM settings
    llm_enabled: bool
    llm_provider: Literal["openai", "anthropic"]
    openai_api_key: str | None
    openai_model: str
    anthropic_api_key: str | None
    anthropic_model: str
    llm_timeout_seconds: float
    llm_max_retries: int

    # Recommendation settings
    recommend_max_tags: int
    recommend_similarity_threshold: float

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        host = os.getenv("HOST", "0.0.0.0")
        port_str = os.getenv("PORT", "8000")
        try:
            port = int(port_str)
        except ValueError:
            raise ConfigurationError(f"PORT must be an integer, got: {port_str}")

        database_url = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./tailless.db")
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        identity_provider_secret = os.getenv("IDENTITY_PROVIDER_SECRET") or None
        session_max_age_seconds = _env_int("SESSION_MAX_AGE_SECONDS", 60 * 60 * 24)
        if session_max_age_seconds <= 0:
            raise ConfigurationError("SESSION_MAX_AGE_SECONDS must be positive")
        session_cookie_name = os.getenv("SESSION_COOKIE_NAME", "tailless_session")
        session_purge_interval_minutes = _env_int("SESSION_PURGE_INTERVAL_MINUTES", 60)

        llm_enabled = _env_bool("LLM_ENABLED", True)
        openai_api_key = os.getenv("OPENAI_API_KEY") or None
        openai_model = os.getenv("OPENAI_MODEL", "gpt-4.1-mini")
        anthropic_api_key = os.getenv("ANTHROPIC_API_KEY") or None
        anthropic_model = os.getenv("ANTHROPIC_MODEL", "claude-haiku-4-5-20251001")
        llm_provider = os.getenv(
            "LLM_PROVIDER", "anthropic" if anthropic_api_key else "openai"
        ).lower()
        if llm_provider not in ("openai", "anthropic"):
            raise ConfigurationError("LLM_PROVIDER must be 'openai' or 'anthropic'")
        llm_timeout_seconds = _env_float("LLM_TIMEOUT_SECONDS", 60.0)
        llm_max_retries = max(1, _env_int("LLM_MAX_RETRIES", 3))

        recommend_max_tags = _env_int("RECOMMEND_MAX_TAGS", 10)
        if recommend_max_tags < 1:
            raise ConfigurationError("RECOMMEND_MAX_TAGS must be at least 1")
        recommend_similarity_threshold = _env_float("RECOMMEND_SIMILARITY_THRESHOLD", 0.5)
        if not 0.0 <= recommend_similarity_threshold <= 1.0:
            raise ConfigurationError("RECOMMEND_SIMILARITY_THRESHOLD must be within [0, 1]")

        return cls(
            host=host,
            port=port,
            database_url=database_url,
            log_level=log_level,
            identity_provider_secret=identity_provider_secret,
            session_max_age_seconds=session_max_age_seconds,
            session_cookie_name=session_cookie_name,
            session_purge_interval_minutes=session_purge_interval_minutes,
            llm_enabled=llm_enabled,
            llm_provider=llm_provider,  # type: ignore[arg-type]
            openai_api_key=openai_api_key,
            openai_model=openai_model,
            anthropic_api_key=anthropic_api_key,
            anthropic_model=anthropic_model,
            llm_timeout_seconds=llm_timeout_seconds,
            llm_max_retries=llm_max_retries,
            recommend_max_tags=recommend_max_tags,
            recommend_similarity_threshold=recommend_similarity_threshold,
        )


config = Config.from_env()
