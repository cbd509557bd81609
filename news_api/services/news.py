"""News CRUD and search."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from news_api.models import Category, News
from news_api.schemas.news import (
    MessageResponse,
    NewsCreate,
    NewsItemResponse,
    NewsListResponse,
    NewsOut,
    NewsSearch,
    NewsUpdate,
)
from news_api.services.auth_gate import Identity
from news_api.services.results import Failure, FailureKind, Result, Success

logger = logging.getLogger(__name__)

NEWS_NOT_FOUND = Failure(FailureKind.NOT_FOUND, "News not found")


def _with_relations(db: Session) -> Query:
    return db.query(News).options(
        joinedload(News.author),
        selectinload(News.categories),
    )


def build_search_query(db: Session, criteria: NewsSearch) -> Query:
    """
    AND of: title-or-content contains keyword (case-insensitive), linked to
    category_id, written by author_id. Each omitted criterion matches everything.
    """
    query = _with_relations(db)
    keyword = criteria.keyword
    if keyword:
        query = query.filter(
            or_(
                News.title.icontains(keyword, autoescape=True),
                News.content.icontains(keyword, autoescape=True),
            )
        )
    if criteria.category_id is not None:
        query = query.filter(News.categories.any(Category.id == criteria.category_id))
    if criteria.author_id is not None:
        query = query.filter(News.author_id == criteria.author_id)
    return query.order_by(News.id)


def _resolve_categories(db: Session, ids: list[int]) -> list[Category] | None:
    """Load categories by id; None if any id does not exist."""
    wanted = set(ids)
    if not wanted:
        return []
    found = db.query(Category).filter(Category.id.in_(wanted)).order_by(Category.id).all()
    if len(found) != len(wanted):
        return None
    return found


def list_news(db: Session) -> Result[NewsListResponse]:
    try:
        items = [NewsOut.model_validate(n) for n in _with_relations(db).order_by(News.id).all()]
    except SQLAlchemyError:
        logger.exception("Fetching news list failed")
        return Failure(FailureKind.STORE_FAILURE, "Failed to get the news list")
    return Success(NewsListResponse(message="Successfully fetched news", news=items))


def get_news(db: Session, news_id: int) -> Result[NewsItemResponse]:
    try:
        news = _with_relations(db).filter(News.id == news_id).first()
        if news is None:
            return NEWS_NOT_FOUND
        out = NewsOut.model_validate(news)
    except SQLAlchemyError:
        logger.exception("Fetching news_id=%s failed", news_id)
        return Failure(FailureKind.STORE_FAILURE, "Failed to fetch news details")
    return Success(NewsItemResponse(message="Successfully fetched news", news=out))


def search_news(db: Session, criteria: NewsSearch) -> Result[NewsListResponse]:
    try:
        items = [NewsOut.model_validate(n) for n in build_search_query(db, criteria).all()]
    except SQLAlchemyError:
        logger.exception("News search failed")
        return Failure(FailureKind.STORE_FAILURE, "Failed to search news")
    return Success(NewsListResponse(message="Successfully searched news", news=items))


def create_news(
    db: Session,
    body: NewsCreate,
    thumbnail: bytes,
    author: Identity,
) -> Result[NewsItemResponse]:
    """Create a news item owned by the authenticated admin."""
    try:
        categories = _resolve_categories(db, body.categories)
        if categories is None:
            return Failure(FailureKind.NOT_FOUND, "Category not found")
        news = News(
            title=body.title,
            content=body.content,
            thumbnail=thumbnail,
            published=body.published,
            author_id=author.user_id,
            categories=categories,
        )
        db.add(news)
        db.commit()
        db.refresh(news)
        out = NewsOut.model_validate(news)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Creating news failed")
        return Failure(FailureKind.STORE_FAILURE, "Failed to create news")

    logger.info("Created news_id=%s by user_id=%s", out.id, author.user_id)
    return Success(
        NewsItemResponse(message="Successfully created news", news=out),
        status_code=201,
    )


def update_news(
    db: Session,
    news_id: int,
    body: NewsUpdate,
    thumbnail: bytes | None,
) -> Result[NewsItemResponse]:
    """
    Apply the provided fields. Categories, when given, replace the existing
    set; the thumbnail is replaced only when a new file was uploaded. The
    author never changes.
    """
    try:
        news = db.get(News, news_id)
        if news is None:
            return NEWS_NOT_FOUND
        if body.categories is not None:
            categories = _resolve_categories(db, body.categories)
            if categories is None:
                return Failure(FailureKind.NOT_FOUND, "Category not found")
            news.categories = categories
        if body.title is not None:
            news.title = body.title
        if body.content is not None:
            news.content = body.content
        if body.published is not None:
            news.published = body.published
        if thumbnail is not None:
            news.thumbnail = thumbnail
        db.commit()
        db.refresh(news)
        out = NewsOut.model_validate(news)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Updating news_id=%s failed", news_id)
        return Failure(FailureKind.STORE_FAILURE, "Failed to update news")

    logger.info("Updated news_id=%s", news_id)
    return Success(NewsItemResponse(message="Successfully updated the news", news=out))


def delete_news(db: Session, news_id: int) -> Result[MessageResponse]:
    try:
        news = db.get(News, news_id)
        if news is None:
            return NEWS_NOT_FOUND
        db.delete(news)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Deleting news_id=%s failed", news_id)
        return Failure(FailureKind.STORE_FAILURE, "Failed to delete news")

    logger.info("Deleted news_id=%s", news_id)
    return Success(MessageResponse(message="Successfully deleted news"))
