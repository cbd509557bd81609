"""Registration and login endpoints."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from news_api.api.deps import AppSettings, DbSession
from news_api.api.responses import respond
from news_api.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from news_api.services import users as user_service

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=201,
    summary="Register a new user",
    responses={400: {"description": "User already exists"}, 500: {"description": "Registration failed"}},
)
def register(body: RegisterRequest, db: DbSession, settings: AppSettings) -> JSONResponse:
    """Create an account with role USER. Admins are created with the create_user script."""
    return respond(user_service.register_user(db, body, settings))


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in an existing user",
    responses={401: {"description": "Invalid email or password"}, 500: {"description": "Login failed"}},
)
def login(body: LoginRequest, db: DbSession, settings: AppSettings) -> JSONResponse:
    """
    Authenticate with email and password; returns a JWT valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    return respond(user_service.login_user(db, body, settings))
