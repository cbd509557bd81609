"""Category endpoints: public listing, admin-only mutations."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from news_api.api.deps import ADMIN_RESPONSES, AdminIdentity, DbSession
from news_api.api.responses import respond
from news_api.api.routing import GatedRoute
from news_api.schemas.category import CategoriesResponse, CategoryIn, CategoryResponse
from news_api.schemas.news import MessageResponse
from news_api.services import categories as category_service

router = APIRouter(route_class=GatedRoute)


@router.get("/categories", response_model=CategoriesResponse, summary="Retrieve all categories")
def get_categories(db: DbSession) -> JSONResponse:
    return respond(category_service.list_categories(db))


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=201,
    summary="Create a new category (Admin only)",
    responses={**ADMIN_RESPONSES, 400: {"description": "Category already exists"}},
)
def create_category(body: CategoryIn, db: DbSession, _admin: AdminIdentity) -> JSONResponse:
    return respond(category_service.create_category(db, body))


@router.put(
    "/categories/{category_id}",
    response_model=CategoryResponse,
    summary="Rename a category (Admin only)",
    responses={
        **ADMIN_RESPONSES,
        400: {"description": "Category already exists"},
        404: {"description": "Category not found"},
    },
)
def update_category(
    category_id: int,
    body: CategoryIn,
    db: DbSession,
    _admin: AdminIdentity,
) -> JSONResponse:
    return respond(category_service.update_category(db, category_id, body))


@router.delete(
    "/categories/{category_id}",
    response_model=MessageResponse,
    summary="Delete a category (Admin only)",
    responses={**ADMIN_RESPONSES, 404: {"description": "Category not found"}},
)
def delete_category(category_id: int, db: DbSession, _admin: AdminIdentity) -> JSONResponse:
    return respond(category_service.delete_category(db, category_id))
