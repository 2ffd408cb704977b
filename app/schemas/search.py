"""Schemas for global search."""

from pydantic import BaseModel, Field

from app.schemas.blog import BlogSummary
from app.schemas.common import CAMEL_CONFIG
from app.schemas.place import PlaceOut, PlaceSummary


class SearchResponse(BaseModel):
    query: str
    places: list[PlaceOut] = Field(default_factory=list)
    blogs: list[BlogSummary] = Field(default_factory=list)
    total: int = 0

    model_config = CAMEL_CONFIG


class TrendingResponse(BaseModel):
    trending_places: list[PlaceSummary]
    trending_blogs: list[BlogSummary]

    model_config = CAMEL_CONFIG
