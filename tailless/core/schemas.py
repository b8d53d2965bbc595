"""Entity and request schemas, plus the boundary validation helper.

Every payload that crosses a trust boundary (client input, rows read back
from storage) is parsed through one of these models. Field names are
snake_case in Python and camelCase on the wire.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from tailless.core import messages
from tailless.core.response import ApiResponse, HttpStatus
from tailless.logging import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class WireModel(BaseModel):
    """Base model: camelCase aliases, population by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class User(WireModel):
    id: str = Field(min_length=1)
    name: str
    email: str
    image: str | None = None


class Profile(User):
    """Identity provider profile presented on sign-in."""


class Layout(str, Enum):
    """Rendering mode of a Space's Moment list."""

    BLOG = "blog"  # article list
    IDEA = "idea"  # card grid
    TIMELINE = "timeline"  # chronological


class Space(WireModel):
    id: str
    title: str = Field(min_length=1)
    image: str | None = None
    description: str
    contributors: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    moments: list[str] = Field(default_factory=list)
    created_at: str
    layout: Layout = Layout.BLOG


class Moment(WireModel):
    id: str
    title: str = Field(min_length=1)
    author: str
    content: str
    created_at: str
    modified_at: str


# ---------------------------------------------------------------------------
# Space requests
# ---------------------------------------------------------------------------


class CreateSpace(WireModel):
    title: str = Field(min_length=1)
    image: str | None = None
    description: str
    contributors: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    moments: list[str] = Field(default_factory=list)
    created_at: str | None = None
    layout: Layout = Layout.BLOG


class UpdateSpace(WireModel):
    """Partial patch; only fields actually sent are applied."""

    id: str = Field(min_length=1)
    title: str | None = Field(default=None, min_length=1)
    image: str | None = None
    description: str | None = None
    contributors: list[str] | None = None
    tags: list[str] | None = None
    moments: list[str] | None = None
    layout: Layout | None = None


class GetSpace(WireModel):
    id: str = Field(min_length=1)


class DeleteSpace(GetSpace):
    pass


class GetSpaces(WireModel):
    title: str | None = None
    tags: list[str] | None = None
    contributors: list[str] | None = None


# ---------------------------------------------------------------------------
# Moment requests
# ---------------------------------------------------------------------------


class CreateMoment(WireModel):
    title: str = Field(min_length=1)
    author: str | None = None
    content: str
    created_at: str | None = None
    modified_at: str | None = None


class UpdateMoment(WireModel):
    id: str = Field(min_length=1)
    title: str | None = Field(default=None, min_length=1)
    author: str | None = None
    content: str | None = None
    modified_at: str | None = None


class GetMoment(WireModel):
    id: str = Field(min_length=1)


class DeleteMoment(GetMoment):
    pass


class GetMoments(WireModel):
    title: str | None = None
    author: str | None = None


# ---------------------------------------------------------------------------
# User requests
# ---------------------------------------------------------------------------


class GetUsers(WireModel):
    name: str | None = None
    email: str | None = None


# ---------------------------------------------------------------------------
# Boundary validation
# ---------------------------------------------------------------------------


@dataclass
class Validated(Generic[M]):
    """Outcome of ``validate``: exactly one of ``value``/``error`` is set."""

    value: M | None = None
    error: ApiResponse | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate(model: type[M], payload: Any) -> Validated[M]:
    """Parse ``payload`` into ``model`` without raising.

    Accepts a mapping or an instance of the model. Failures become a 400
    response carrying the fixed validation message.
    """
    if isinstance(payload, model):
        return Validated(value=payload)

    try:
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(exclude_unset=True)
        return Validated(value=model.model_validate(payload))
    except ValidationError as e:
        logger.info(f"Rejected {model.__name__} payload: {e.error_count()} error(s)")
        return Validated(
            error=ApiResponse.failure(HttpStatus.BAD_REQUEST, messages.INVALID_INPUT)
        )


def patch_fields(update: BaseModel, *, exclude: set[str] | None = None) -> dict[str, Any]:
    """Fields explicitly present in a partial update, by Python name."""
    exclude = exclude or set()
    return {
        name: getattr(update, name)
        for name in update.model_fields_set
        if name not in exclude
    }
