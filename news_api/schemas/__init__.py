"""Pydantic request/response schemas."""

from news_api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserSummary,
)
from news_api.schemas.category import (
    CategoriesResponse,
    CategoryIn,
    CategoryOut,
    CategoryResponse,
)
from news_api.schemas.health import HealthResponse
from news_api.schemas.news import (
    AuthorOut,
    MessageResponse,
    NewsCreate,
    NewsItemResponse,
    NewsListResponse,
    NewsOut,
    NewsSearch,
    NewsUpdate,
)

__all__ = [
    "AuthorOut",
    "CategoriesResponse",
    "CategoryIn",
    "CategoryOut",
    "CategoryResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "NewsCreate",
    "NewsItemResponse",
    "NewsListResponse",
    "NewsOut",
    "NewsSearch",
    "NewsUpdate",
    "RegisterRequest",
    "RegisterResponse",
    "UserSummary",
]
