"""SQLAlchemy ORM models."""

from news_api.models.base import Base
from news_api.models.news import News, news_categories
from news_api.models.category import Category
from news_api.models.user import Profile, Role, User

__all__ = ["Base", "Category", "News", "Profile", "Role", "User", "news_categories"]
