"""Application factory. No business logic; only wiring and middleware."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session, sessionmaker

from news_api.api import api_router, auth_router, health_router
from news_api.api.responses import (
    GateRejected,
    gate_rejected_handler,
    unhandled_error_handler,
    validation_error_handler,
)
from news_api.core.config import Settings
from news_api.core.database import build_engine, build_session_factory
from news_api.core.logging import configure_logging


def create_app(
    settings: Settings,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """
    Build the application around one Settings instance and one session factory.

    Both are stored on app.state and reach handlers only through dependencies.
    Pass session_factory to use an existing store instead of DATABASE_URL.
    """
    configure_logging(settings)

    app = FastAPI(
        title="News API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.session_factory = session_factory or build_session_factory(build_engine(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(GateRejected, gate_rejected_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(auth_router, prefix=settings.AUTH_PREFIX)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(health_router)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "News API"}

    return app

