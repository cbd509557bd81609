"""Request/response schemas for category endpoints."""

from pydantic import BaseModel, Field


class CategoryIn(BaseModel):
    """Body for creating or renaming a category."""

    name: str = Field(..., min_length=1, max_length=255, description="Category name")

    class Config:
        str_strip_whitespace = True


class CategoryOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class CategoryResponse(BaseModel):
    message: str
    category: CategoryOut


class CategoriesResponse(BaseModel):
    message: str
    categories: list[CategoryOut]
