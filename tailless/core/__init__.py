"""Core domain types: result envelope, schemas, editor block model."""

from tailless.core.response import ApiResponse, HttpStatus
from tailless.core.schemas import (
    CreateMoment,
    CreateSpace,
    Layout,
    Moment,
    Profile,
    Space,
    UpdateMoment,
    UpdateSpace,
    User,
    Validated,
    validate,
)

__all__ = [
    "ApiResponse",
    "HttpStatus",
    "CreateMoment",
    "CreateSpace",
    "Layout",
    "Moment",
    "Profile",
    "Space",
    "UpdateMoment",
    "UpdateSpace",
    "User",
    "Validated",
    "validate",
]
