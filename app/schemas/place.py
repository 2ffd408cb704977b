"""Pydantic schemas for places."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from app.models.place import PlaceStatus, PlaceType
from app.schemas.category import CategoryBrief, TagOut
from app.schemas.common import CAMEL_CONFIG, PageMeta, clamp_limit, clamp_page
from app.schemas.media import MediaBrief

MIN_RADIUS_KM = 0.1
MAX_RADIUS_KM = 1000.0


class PlaceQuery(BaseModel):
    """Validated descriptor for place listing and geospatial search."""

    page: int = 1
    limit: int = 20
    search: str | None = None
    category_id: int | None = None
    place_type: PlaceType | None = None
    status: PlaceStatus = PlaceStatus.PUBLISHED
    city: str | None = None
    country: str | None = None
    tag_ids: list[int] | None = None
    is_featured: bool | None = None
    min_rating: float | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"

    # radius mode
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    radius_km: float | None = Field(None, gt=MIN_RADIUS_KM, le=MAX_RADIUS_KM)

    # bounds mode
    sw_lat: float | None = Field(None, ge=-90, le=90)
    sw_lng: float | None = Field(None, ge=-180, le=180)
    ne_lat: float | None = Field(None, ge=-90, le=90)
    ne_lng: float | None = Field(None, ge=-180, le=180)

    model_config = CAMEL_CONFIG

    @field_validator("page")
    @classmethod
    def _clamp_page(cls, value: int) -> int:
        return clamp_page(value)

    @field_validator("limit")
    @classmethod
    def _clamp_limit(cls, value: int) -> int:
        return clamp_limit(value)

    @field_validator("sort_order")
    @classmethod
    def _normalise_order(cls, value: str) -> str:
        return "asc" if value and value.lower() == "asc" else "desc"

    @field_validator("search", "city", "country")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def has_radius(self) -> bool:
        return self.latitude is not None and self.longitude is not None and self.radius_km is not None

    @property
    def has_bounds(self) -> bool:
        return None not in (self.sw_lat, self.sw_lng, self.ne_lat, self.ne_lng)


class PlaceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    short_description: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    category_id: int | None = None
    place_type: PlaceType = PlaceType.OTHER
    featured_image_id: int | None = None
    tag_ids: list[int] = Field(default_factory=list)
    opening_hours: dict[str, Any] | None = None
    contact_info: dict[str, Any] | None = None
    admission_fee: dict[str, Any] | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: list[str] | None = None
    status: PlaceStatus = PlaceStatus.DRAFT
    is_featured: bool = False

    model_config = CAMEL_CONFIG


class PlaceUpdate(BaseModel):
    """Partial update; only fields that were sent are applied."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    short_description: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    category_id: int | None = None
    place_type: PlaceType | None = None
    featured_image_id: int | None = None
    tag_ids: list[int] | None = None
    opening_hours: dict[str, Any] | None = None
    contact_info: dict[str, Any] | None = None
    admission_fee: dict[str, Any] | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: list[str] | None = None
    status: PlaceStatus | None = None
    is_featured: bool | None = None

    model_config = CAMEL_CONFIG


class PlaceSummary(BaseModel):
    id: int
    name: str
    slug: str
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    rating: float = 0.0
    visit_count: int = 0

    model_config = CAMEL_CONFIG


class PlaceOut(PlaceSummary):
    description: str | None = None
    short_description: str | None = None
    address: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    category_id: int | None = None
    category: CategoryBrief | None = None
    place_type: str
    tags: list[TagOut] = Field(default_factory=list)
    featured_image: MediaBrief | None = None
    opening_hours: dict[str, Any] | None = None
    contact_info: dict[str, Any] | None = None
    admission_fee: dict[str, Any] | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: list[str] | None = None
    status: str
    is_featured: bool = False
    review_count: int = 0
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    distance_km: float | None = None


class PlaceListResponse(BaseModel):
    data: list[PlaceOut]
    meta: PageMeta

    model_config = CAMEL_CONFIG
