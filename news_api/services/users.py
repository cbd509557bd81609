"""Registration and login against the user store."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from news_api.core.security import create_access_token, hash_password, verify_password
from news_api.models import Profile, User
from news_api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserSummary,
)
from news_api.services.results import Failure, FailureKind, Result, Success

if TYPE_CHECKING:
    from news_api.core.config import Settings

logger = logging.getLogger(__name__)

USER_EXISTS = Failure(FailureKind.CONFLICT, "User already exists")
INVALID_CREDENTIALS = Failure(FailureKind.INVALID_CREDENTIALS, "Invalid email or password")


def _summary(user: User) -> UserSummary:
    return UserSummary(username=user.name, email=user.email)


def register_user(
    db: Session,
    body: RegisterRequest,
    settings: "Settings",
) -> Result[RegisterResponse]:
    """
    Create a user (role USER) with an empty profile in a single commit.

    An already registered email returns CONFLICT immediately; nothing else runs.
    """
    email = body.email.strip().lower()
    try:
        if db.query(User.id).filter(User.email == email).first() is not None:
            logger.info("Registration refused: email already registered")
            return USER_EXISTS
        user = User(
            email=email,
            name=body.username,
            password_hash=hash_password(body.password, rounds=settings.BCRYPT_ROUNDS),
            profile=Profile(),
        )
        db.add(user)
        db.commit()
        summary = _summary(user)
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email.
        db.rollback()
        return USER_EXISTS
    except SQLAlchemyError:
        db.rollback()
        logger.exception("User registration failed")
        return Failure(FailureKind.STORE_FAILURE, "User registration failed")

    logger.info("Registered new user")
    return Success(
        RegisterResponse(message="Successfully registered", user=summary),
        status_code=201,
    )


def login_user(
    db: Session,
    body: LoginRequest,
    settings: "Settings",
) -> Result[LoginResponse]:
    """Check credentials and issue a bearer token carrying only the user id."""
    email = body.email.strip().lower()
    try:
        user = db.query(User).filter(User.email == email).first()
    except SQLAlchemyError:
        logger.exception("Login lookup failed")
        return Failure(FailureKind.STORE_FAILURE, "Login failed")

    if user is None or not verify_password(body.password, user.password_hash):
        return INVALID_CREDENTIALS

    token = create_access_token(user.id, settings)
    return Success(
        LoginResponse(message="Login successful", user=_summary(user), token=token)
    )
