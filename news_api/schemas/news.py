"""Request/response schemas for news endpoints."""

import base64
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from news_api.schemas.category import CategoryOut

TITLE_MAX_LEN = 255


class NewsCreate(BaseModel):
    """Validated fields of a multipart news creation request (thumbnail handled separately)."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LEN)
    content: str = Field(..., min_length=1)
    categories: list[int] = Field(default_factory=list)
    published: bool = False


class NewsUpdate(BaseModel):
    """Partial update; None means leave the field unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LEN)
    content: str | None = Field(default=None, min_length=1)
    categories: list[int] | None = None
    published: bool | None = None


class NewsSearch(BaseModel):
    """Optional search criteria; omitted criteria match everything."""

    keyword: str | None = None
    category_id: int | None = None
    author_id: int | None = None


class AuthorOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class NewsOut(BaseModel):
    """News item as returned over the wire; thumbnail is base64 text."""

    id: int
    title: str
    content: str
    thumbnail: str | None = None
    published: bool
    author_id: int
    author: AuthorOut | None = None
    categories: list[CategoryOut] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True

    @field_validator("thumbnail", mode="before")
    @classmethod
    def encode_thumbnail(cls, v: object) -> object:
        if isinstance(v, (bytes, bytearray, memoryview)):
            return base64.b64encode(bytes(v)).decode("ascii")
        return v


class NewsItemResponse(BaseModel):
    message: str
    news: NewsOut


class NewsListResponse(BaseModel):
    message: str
    news: list[NewsOut]


class MessageResponse(BaseModel):
    message: str
