"""Schemas for categories and tags."""

from pydantic import BaseModel

from app.schemas.common import CAMEL_CONFIG


class TagOut(BaseModel):
    id: int
    name: str
    slug: str

    model_config = CAMEL_CONFIG


class CategoryBrief(BaseModel):
    id: int
    name: str
    slug: str
    icon: str | None = None

    model_config = CAMEL_CONFIG


class CategoryOut(CategoryBrief):
    description: str | None = None
    display_order: int = 0
    place_count: int = 0
    blog_count: int = 0
