"""News endpoints: public listing, detail and search; admin-only multipart create/update/delete."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from news_api.api.deps import ADMIN_RESPONSES, AdminIdentity, AppSettings, DbSession
from news_api.api.responses import failure_response, respond
from news_api.api.routing import GatedRoute
from news_api.schemas.news import (
    TITLE_MAX_LEN,
    MessageResponse,
    NewsCreate,
    NewsItemResponse,
    NewsListResponse,
    NewsSearch,
    NewsUpdate,
)
from news_api.services import news as news_service
from news_api.services.results import Failure, FailureKind
from news_api.services.uploads import has_file, read_thumbnail

router = APIRouter(route_class=GatedRoute)

THUMBNAIL_REQUIRED = Failure(
    FailureKind.INVALID_INPUT,
    "Image not found. Please attach a thumbnail image.",
)


@router.get("/news", response_model=NewsListResponse, summary="Retrieve all news items")
def get_all_news(db: DbSession) -> JSONResponse:
    """All news with categories, author name and base64 thumbnail."""
    return respond(news_service.list_news(db))


@router.get(
    "/news/{news_id}",
    response_model=NewsItemResponse,
    summary="Retrieve a specific news item by ID",
    responses={404: {"description": "News item not found"}},
)
def get_news_details(news_id: int, db: DbSession) -> JSONResponse:
    return respond(news_service.get_news(db, news_id))


@router.get("/search", response_model=NewsListResponse, summary="Search for news items")
def search_news(
    db: DbSession,
    keyword: Annotated[
        str | None,
        Query(description="Case-insensitive match against title or content"),
    ] = None,
    category_id: Annotated[
        int | None,
        Query(alias="categoryId", description="Only news linked to this category"),
    ] = None,
    author_id: Annotated[
        int | None,
        Query(alias="authorId", description="Only news written by this user"),
    ] = None,
) -> JSONResponse:
    """All criteria are optional and combined with AND."""
    criteria = NewsSearch(keyword=keyword, category_id=category_id, author_id=author_id)
    return respond(news_service.search_news(db, criteria))


@router.post(
    "/news",
    response_model=NewsItemResponse,
    status_code=201,
    summary="Create a new news item (Admin only)",
    responses={
        **ADMIN_RESPONSES,
        404: {"description": "Category not found"},
        408: {"description": "Timed out reading thumbnail"},
    },
)
async def create_news(
    db: DbSession,
    settings: AppSettings,
    admin: AdminIdentity,
    title: Annotated[str, Form(min_length=1, max_length=TITLE_MAX_LEN)],
    content: Annotated[str, Form(min_length=1)],
    thumbnail: Annotated[UploadFile, File(description="Thumbnail image (jpeg, png, gif, webp)")],
    categories: Annotated[list[int] | None, Form(description="Category ids")] = None,
    published: Annotated[bool, Form()] = False,
) -> JSONResponse:
    """
    Create a news item from multipart form data. The author is the
    authenticated admin; the thumbnail is stored as raw bytes.
    """
    if not has_file(thumbnail):
        return failure_response(THUMBNAIL_REQUIRED)
    body = NewsCreate(
        title=title,
        content=content,
        categories=categories or [],
        published=published,
    )
    async with read_thumbnail(thumbnail, settings) as read:
        if isinstance(read, Failure):
            return failure_response(read)
        result = await run_in_threadpool(news_service.create_news, db, body, read.value, admin)
    return respond(result)


@router.put(
    "/news/{news_id}",
    response_model=NewsItemResponse,
    summary="Update a news item by ID (Admin only)",
    responses={
        **ADMIN_RESPONSES,
        404: {"description": "News item or category not found"},
        408: {"description": "Timed out reading thumbnail"},
    },
)
async def update_news(
    news_id: int,
    db: DbSession,
    settings: AppSettings,
    _admin: AdminIdentity,
    title: Annotated[str | None, Form(min_length=1, max_length=TITLE_MAX_LEN)] = None,
    content: Annotated[str | None, Form(min_length=1)] = None,
    categories: Annotated[list[int] | None, Form(description="Replaces the category set")] = None,
    published: Annotated[bool | None, Form()] = None,
    thumbnail: Annotated[UploadFile | None, File(description="Optional replacement thumbnail")] = None,
) -> JSONResponse:
    """Update only the provided fields; omit the thumbnail to keep the current one."""
    body = NewsUpdate(title=title, content=content, categories=categories, published=published)
    if thumbnail is None or not has_file(thumbnail):
        result = await run_in_threadpool(news_service.update_news, db, news_id, body, None)
        return respond(result)
    async with read_thumbnail(thumbnail, settings) as read:
        if isinstance(read, Failure):
            return failure_response(read)
        result = await run_in_threadpool(news_service.update_news, db, news_id, body, read.value)
    return respond(result)


@router.delete(
    "/news/{news_id}",
    response_model=MessageResponse,
    summary="Delete a news item by ID (Admin only)",
    responses={**ADMIN_RESPONSES, 404: {"description": "News item not found"}},
)
def delete_news(news_id: int, db: DbSession, _admin: AdminIdentity) -> JSONResponse:
    return respond(news_service.delete_news(db, news_id))
