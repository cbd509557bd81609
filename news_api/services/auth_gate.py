"""Two-stage request gate: authenticate a bearer token, then require the ADMIN role.

Both stages return a Result instead of raising so the outcome can be mapped to
a status code at one boundary. The identity produced by ``authenticate`` is
passed explicitly to ``authorize_admin`` and on to the handler.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from news_api.core.security import decode_access_token
from news_api.models import Role, User
from news_api.services.results import Failure, FailureKind, Result, Success

if TYPE_CHECKING:
    from news_api.core.config import Settings

logger = logging.getLogger(__name__)

ACCESS_DENIED = Failure(FailureKind.ACCESS_DENIED, "Access denied")
INVALID_TOKEN = Failure(FailureKind.INVALID_TOKEN, "Invalid token")
ADMIN_REQUIRED = Failure(FailureKind.ADMIN_REQUIRED, "Admin access required")


@dataclass(frozen=True)
class Identity:
    """Verified subject of a bearer token."""

    user_id: int


def authenticate(token: str | None, settings: "Settings") -> Result[Identity]:
    """
    Verify a bearer token and return the identity it names.

    No token -> ACCESS_DENIED. Bad signature, malformed token, elapsed expiry
    or a missing/non-integer ``id`` claim -> INVALID_TOKEN.
    """
    if not token:
        return ACCESS_DENIED
    try:
        claims = decode_access_token(token, settings)
    except jwt.PyJWTError as e:
        logger.info("Rejected bearer token: %s", type(e).__name__)
        return INVALID_TOKEN
    user_id = claims.get("id")
    # bool is an int subclass; a token claiming id=true is not a user id.
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        logger.info("Rejected bearer token: id claim is not an integer")
        return INVALID_TOKEN
    return Success(Identity(user_id=user_id))


def authorize_admin(identity: Identity, db: Session) -> Result[Identity]:
    """
    Admit the identity only if its stored user currently has role ADMIN.

    One read against the store per call; the role is never taken from the token,
    so a role change applies on the very next request.
    """
    try:
        user = db.get(User, identity.user_id)
    except SQLAlchemyError:
        logger.exception("Role lookup failed for user_id=%s", identity.user_id)
        return Failure(FailureKind.STORE_FAILURE, "Failed to verify access")
    if user is None or user.role != Role.ADMIN:
        logger.info("Admin access refused for user_id=%s", identity.user_id)
        return ADMIN_REQUIRED
    return Success(identity)
