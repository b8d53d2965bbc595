"""Encoding for the JSON text columns that hold ID and tag lists."""

import json

from tailless.logging import get_logger

logger = get_logger(__name__)


def dump_str_list(values: list[str] | None) -> str:
    return json.dumps(list(values or []), ensure_ascii=False, separators=(",", ":"))


def load_str_list(text: str | None) -> list[str]:
    """Parse a list column; corrupt or non-list values read as empty."""
    if not text:
        return []
    try:
        data = json.loads(text)
    except ValueError as e:
        logger.warning(f"Unreadable list column {text[:40]!r}: {e}")
        return []
    if not isinstance(data, list):
        logger.warning(f"Expected JSON list, got {type(data).__name__}")
        return []
    return [item for item in data if isinstance(item, str)]
