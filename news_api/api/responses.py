"""Single mapping from service outcomes to HTTP status codes and JSON envelopes."""

import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from news_api.services.results import Failure, FailureKind, Result

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[FailureKind, int] = {
    FailureKind.ACCESS_DENIED: 403,
    FailureKind.INVALID_TOKEN: 401,
    FailureKind.ADMIN_REQUIRED: 403,
    FailureKind.INVALID_CREDENTIALS: 401,
    FailureKind.NOT_FOUND: 404,
    FailureKind.CONFLICT: 400,
    FailureKind.INVALID_INPUT: 422,
    FailureKind.UPLOAD_TIMEOUT: 408,
    FailureKind.STORE_FAILURE: 500,
}

# Failures reported under "error"; everything else under "message".
ERROR_KEYED_KINDS = frozenset({FailureKind.INVALID_CREDENTIALS, FailureKind.STORE_FAILURE})


class GateRejected(Exception):
    """Raised by auth dependencies to stop a request before its handler runs."""

    def __init__(self, failure: Failure) -> None:
        self.failure = failure
        super().__init__(failure.message)


def failure_response(failure: Failure) -> JSONResponse:
    key = "error" if failure.kind in ERROR_KEYED_KINDS else "message"
    headers = {"WWW-Authenticate": "Bearer"} if failure.kind == FailureKind.INVALID_TOKEN else None
    return JSONResponse(
        status_code=STATUS_BY_KIND[failure.kind],
        content={key: failure.message},
        headers=headers,
    )


def respond(result: Result[BaseModel]) -> JSONResponse:
    """Render a service Result as the JSON response sent to the client."""
    if isinstance(result, Failure):
        return failure_response(result)
    return JSONResponse(
        status_code=result.status_code,
        content=result.value.model_dump(mode="json"),
    )


async def gate_rejected_handler(request: Request, exc: GateRejected) -> JSONResponse:
    return failure_response(exc.failure)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return failure_response(Failure(FailureKind.STORE_FAILURE, "Internal server error"))
