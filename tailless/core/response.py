"""Uniform result envelope returned by every action."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class HttpStatus:
    """HTTP-like status codes carried by ``ApiResponse``."""

    OK = 200

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    CONFLICT = 409

    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_dump(v) for v in value]
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    return value


@dataclass
class ApiResponse(Generic[T]):
    """Either success (status 200, message, optional data) or failure
    (4xx/5xx status with one or more human-readable messages).

    Callers branch on ``ok``/``status``; nothing is raised for expected
    failures.
    """

    status: int
    message: str | None = None
    data: T | None = None
    error_messages: list[str] = field(default_factory=list)

    @classmethod
    def success(cls, message: str, data: T | None = None) -> "ApiResponse[T]":
        return cls(status=HttpStatus.OK, message=message, data=data)

    @classmethod
    def failure(cls, status: int, *messages: str) -> "ApiResponse[Any]":
        if status == HttpStatus.OK:
            raise ValueError("failure responses need a 4xx/5xx status")
        return cls(status=status, error_messages=list(messages))

    @property
    def ok(self) -> bool:
        return self.status == HttpStatus.OK

    def to_dict(self) -> dict[str, Any]:
        """Wire form: ``{status, message, data?}`` or ``{status, errorMessages}``."""
        if not self.ok:
            return {"status": self.status, "errorMessages": list(self.error_messages)}

        body: dict[str, Any] = {"status": self.status, "message": self.message}
        if self.data is not None:
            body["data"] = _dump(self.data)
        return body
