"""Request-scoped dependencies: settings, and the authenticate -> authorize_admin gate."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from news_api.api.responses import GateRejected
from news_api.core.config import Settings
from news_api.core.database import get_db
from news_api.services.auth_gate import Identity, authenticate, authorize_admin
from news_api.services.results import Failure

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Dependency: the Settings instance the app was created with."""
    return request.app.state.settings


def require_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Identity:
    """Dependency: require a valid Bearer JWT. 403 if absent, 401 if invalid or expired."""
    token = credentials.credentials if credentials is not None else None
    result = authenticate(token, settings)
    if isinstance(result, Failure):
        raise GateRejected(result)
    return result.value


def require_admin(
    identity: Annotated[Identity, Depends(require_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> Identity:
    """Dependency: require an authenticated user whose stored role is ADMIN. 403 otherwise."""
    result = authorize_admin(identity, db)
    if isinstance(result, Failure):
        raise GateRejected(result)
    return result.value


DbSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
AdminIdentity = Annotated[Identity, Depends(require_admin)]

# OpenAPI documentation for routes guarded by require_admin.
ADMIN_RESPONSES: dict[int | str, dict[str, str]] = {
    401: {"description": "Invalid or expired token"},
    403: {"description": "Missing token or admin access required"},
}
