"""Core app configuration, database and security primitives."""

from news_api.core.config import Settings, get_settings
from news_api.core.database import build_engine, build_session_factory, get_db

__all__ = ["Settings", "get_settings", "build_engine", "build_session_factory", "get_db"]
