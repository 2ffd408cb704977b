"""Schemas for blogs and their comments."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.blog import BlogStatus
from app.schemas.category import CategoryBrief, TagOut
from app.schemas.common import CAMEL_CONFIG, PageMeta, clamp_limit, clamp_page
from app.schemas.media import MediaBrief
from app.schemas.place import PlaceSummary


class BlogQuery(BaseModel):
    page: int = 1
    limit: int = 20
    search: str | None = None
    category_id: int | None = None
    status: BlogStatus = BlogStatus.PUBLISHED
    is_featured: bool | None = None
    tag_ids: list[int] | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"

    model_config = CAMEL_CONFIG

    @field_validator("page")
    @classmethod
    def _clamp_page(cls, value: int) -> int:
        return clamp_page(value)

    @field_validator("limit")
    @classmethod
    def _clamp_limit(cls, value: int) -> int:
        return clamp_limit(value)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class BlogCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    excerpt: str | None = None
    author_name: str | None = None
    featured_image_id: int | None = None
    category_id: int | None = None
    read_time: int | None = Field(None, ge=0)
    tag_ids: list[int] = Field(default_factory=list)
    related_place_ids: list[int] = Field(default_factory=list)
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: list[str] | None = None
    status: BlogStatus = BlogStatus.DRAFT
    is_featured: bool = False

    model_config = CAMEL_CONFIG


class BlogUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    excerpt: str | None = None
    author_name: str | None = None
    featured_image_id: int | None = None
    category_id: int | None = None
    read_time: int | None = Field(None, ge=0)
    tag_ids: list[int] | None = None
    related_place_ids: list[int] | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: list[str] | None = None
    status: BlogStatus | None = None
    is_featured: bool | None = None

    model_config = CAMEL_CONFIG


class BlogSummary(BaseModel):
    id: int
    title: str
    slug: str
    excerpt: str | None = None
    view_count: int = 0
    published_at: datetime | None = None

    model_config = CAMEL_CONFIG


class BlogOut(BlogSummary):
    content: str
    author_name: str | None = None
    category_id: int | None = None
    category: CategoryBrief | None = None
    featured_image: MediaBrief | None = None
    read_time: int | None = None
    tags: list[TagOut] = Field(default_factory=list)
    related_places: list[PlaceSummary] = Field(default_factory=list)
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: list[str] | None = None
    status: str
    is_featured: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BlogListResponse(BaseModel):
    data: list[BlogOut]
    meta: PageMeta

    model_config = CAMEL_CONFIG


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    author_name: str | None = Field(None, max_length=100)
    author_email: EmailStr | None = None

    model_config = CAMEL_CONFIG


class CommentOut(BaseModel):
    id: int
    blog_id: int
    author_name: str | None = None
    content: str
    status: str
    created_at: datetime | None = None

    model_config = CAMEL_CONFIG
