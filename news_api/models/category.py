"""ORM model for news categories."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from news_api.models.base import Base
from news_api.models.news import news_categories


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)

    news = relationship("News", secondary=news_categories, back_populates="categories")
