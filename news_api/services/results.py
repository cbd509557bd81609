"""Outcome types returned by services: a success payload or a tagged failure."""

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class FailureKind(str, enum.Enum):
    """Every way a request can fail; mapped to HTTP status in one place (api.responses)."""

    ACCESS_DENIED = "access_denied"
    INVALID_TOKEN = "invalid_token"
    ADMIN_REQUIRED = "admin_required"
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_INPUT = "invalid_input"
    UPLOAD_TIMEOUT = "upload_timeout"
    STORE_FAILURE = "store_failure"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    status_code: int = 200


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str


Result = Success[T] | Failure
