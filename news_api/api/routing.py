"""Route class that keeps the admin gate ahead of request-body errors."""

from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.dependencies.models import Dependant
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from fastapi.security.utils import get_authorization_scheme_param

from news_api.api.deps import require_admin
from news_api.api.responses import failure_response
from news_api.services.auth_gate import authenticate, authorize_admin
from news_api.services.results import Failure


def _depends_on(dependant: Dependant, call: Callable[..., Any]) -> bool:
    return any(
        sub.call is call or _depends_on(sub, call) for sub in dependant.dependencies
    )


def _bearer_token(request: Request) -> str | None:
    scheme, credentials = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer" or not credentials:
        return None
    return credentials


def check_admin_gate(request: Request) -> Failure | None:
    """Run authenticate then authorize_admin outside dependency resolution; None if admitted."""
    result = authenticate(_bearer_token(request), request.app.state.settings)
    if isinstance(result, Failure):
        return result
    db = request.app.state.session_factory()
    try:
        admitted = authorize_admin(result.value, db)
    finally:
        db.close()
    return admitted if isinstance(admitted, Failure) else None


class GatedRoute(APIRoute):
    """
    FastAPI parses the request body before resolving dependencies, so a
    malformed body would be reported ahead of a missing or rejected token.
    For routes depending on require_admin, a body error is answered with the
    gate's failure when the gate would not have admitted the request.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()
        if not _depends_on(self.dependant, require_admin):
            return handler

        async def gated_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except (RequestValidationError, HTTPException) as exc:
                if isinstance(exc, HTTPException) and exc.status_code != 400:
                    raise
                rejection = await run_in_threadpool(check_admin_gate, request)
                if rejection is not None:
                    return failure_response(rejection)
                raise

        return gated_handler
