"""HTTP routes: /auth for credentials, /api for news and categories."""

from fastapi import APIRouter

from news_api.api import auth, categories, health, news

auth_router = APIRouter()
auth_router.include_router(auth.router, tags=["Authentication"])

api_router = APIRouter()
api_router.include_router(news.router, tags=["News"])
api_router.include_router(categories.router, tags=["Categories"])

health_router = APIRouter()
health_router.include_router(health.router, prefix="/health", tags=["health"])

__all__ = ["api_router", "auth_router", "health_router"]
