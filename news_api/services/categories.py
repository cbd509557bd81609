"""Category CRUD."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from news_api.models import Category
from news_api.schemas.category import (
    CategoriesResponse,
    CategoryIn,
    CategoryOut,
    CategoryResponse,
)
from news_api.schemas.news import MessageResponse
from news_api.services.results import Failure, FailureKind, Result, Success

logger = logging.getLogger(__name__)

CATEGORY_NOT_FOUND = Failure(FailureKind.NOT_FOUND, "Category not found")
CATEGORY_EXISTS = Failure(FailureKind.CONFLICT, "Category already exists")


def list_categories(db: Session) -> Result[CategoriesResponse]:
    try:
        categories = db.query(Category).order_by(Category.id).all()
        items = [CategoryOut.model_validate(c) for c in categories]
    except SQLAlchemyError:
        logger.exception("Fetching categories failed")
        return Failure(FailureKind.STORE_FAILURE, "Failed to fetch categories")
    return Success(CategoriesResponse(message="Successfully fetched categories", categories=items))


def create_category(db: Session, body: CategoryIn) -> Result[CategoryResponse]:
    try:
        category = Category(name=body.name)
        db.add(category)
        db.commit()
        out = CategoryOut.model_validate(category)
    except IntegrityError:
        db.rollback()
        return CATEGORY_EXISTS
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Creating category failed")
        return Failure(FailureKind.STORE_FAILURE, "Failed to create category")

    logger.info("Created category_id=%s", out.id)
    return Success(
        CategoryResponse(message="Successfully created a category", category=out),
        status_code=201,
    )


def update_category(db: Session, category_id: int, body: CategoryIn) -> Result[CategoryResponse]:
    try:
        category = db.get(Category, category_id)
        if category is None:
            return CATEGORY_NOT_FOUND
        category.name = body.name
        db.commit()
        out = CategoryOut.model_validate(category)
    except IntegrityError:
        db.rollback()
        return CATEGORY_EXISTS
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Updating category_id=%s failed", category_id)
        return Failure(FailureKind.STORE_FAILURE, "Failed to update category")

    logger.info("Updated category_id=%s", category_id)
    return Success(CategoryResponse(message="Successfully updated the category", category=out))


def delete_category(db: Session, category_id: int) -> Result[MessageResponse]:
    """Delete a category; its links to news are removed with it, the news stay."""
    try:
        category = db.get(Category, category_id)
        if category is None:
            return CATEGORY_NOT_FOUND
        db.delete(category)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Deleting category_id=%s failed", category_id)
        return Failure(FailureKind.STORE_FAILURE, "Failed to delete category")

    logger.info("Deleted category_id=%s", category_id)
    return Success(MessageResponse(message="Successfully deleted the category"))
