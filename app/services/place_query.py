"""Place query engine: plain filtering, radius search and map-viewport search."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from app.core.config import settings
from app.core.errors import InvalidInputError
from app.schemas.common import total_pages
from app.schemas.place import MAX_RADIUS_KM, MIN_RADIUS_KM, PlaceQuery
from app.services.geo import BoundingBox, GeoPoint
from app.services.place_store import PlaceFilter, PlaceHit, PlaceStore, SortSpec

logger = logging.getLogger(__name__)

DEFAULT_SORT_FIELD = "created_at"

# accepted sortBy values -> model attribute
SORT_FIELDS = {
    "created_at": "created_at",
    "createdAt": "created_at",
    "updated_at": "updated_at",
    "updatedAt": "updated_at",
    "published_at": "published_at",
    "publishedAt": "published_at",
    "rating": "rating",
    "name": "name",
    "visit_count": "visit_count",
    "visitCount": "visit_count",
}


class QueryMode(str, enum.Enum):
    PLAIN = "plain"
    RADIUS = "radius"
    BOUNDS = "bounds"


@dataclass
class PlacePage:
    hits: list[PlaceHit]
    total: int
    page: int
    limit: int
    extra_meta: dict = field(default_factory=dict)

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)


def resolve_sort(sort_by: str | None, sort_order: str | None) -> SortSpec:
    """Map request sort options onto a column; unknown fields use the default."""
    column = SORT_FIELDS.get(sort_by or "", DEFAULT_SORT_FIELD)
    return SortSpec(field=column, descending=(sort_order or "desc").lower() != "asc")


def select_mode(query: PlaceQuery) -> QueryMode:
    if query.has_radius:
        return QueryMode.RADIUS
    if query.has_bounds:
        return QueryMode.BOUNDS
    return QueryMode.PLAIN


def _check_radius(radius_km: float) -> None:
    if not MIN_RADIUS_KM < radius_km <= MAX_RADIUS_KM:
        raise InvalidInputError(f"radiusKm must be in ({MIN_RADIUS_KM}, {MAX_RADIUS_KM}], got {radius_km}")


class PlaceQueryEngine:
    """Resolve a ``PlaceQuery`` into a ``PlacePage`` using one ranking mode."""

    def __init__(self, store: PlaceStore, default_radius_km: float | None = None) -> None:
        self.store = store
        self.default_radius_km = default_radius_km or settings.nearby_default_radius_km

    def search(self, query: PlaceQuery) -> PlacePage:
        mode = select_mode(query)
        logger.debug("place query mode=%s page=%s limit=%s", mode.value, query.page, query.limit)
        if mode is QueryMode.RADIUS:
            return self._radius(query, query.radius_km)
        if mode is QueryMode.BOUNDS:
            return self._bounds(query)
        return self._plain(query)

    def find_nearby(self, query: PlaceQuery) -> PlacePage:
        """Radius search; without a centre the page is empty and explains why."""
        if query.latitude is None or query.longitude is None:
            return self._empty(query, "Latitude and longitude are required for nearby search")
        return self._radius(query, query.radius_km or self.default_radius_km)

    def find_in_bounds(self, query: PlaceQuery) -> PlacePage:
        """Viewport search; any missing corner yields an explained empty page."""
        if not query.has_bounds:
            return self._empty(query, "All bounding box coordinates are required")
        return self._bounds(query)

    def _plain(self, query: PlaceQuery) -> PlacePage:
        sort = resolve_sort(query.sort_by, query.sort_order)
        hits, total = self.store.find(PlaceFilter.from_query(query), sort, query.offset, query.limit)
        return PlacePage(hits, total, query.page, query.limit)

    def _radius(self, query: PlaceQuery, radius_km: float) -> PlacePage:
        _check_radius(radius_km)
        center = GeoPoint(query.latitude, query.longitude)
        hits, total = self.store.within_radius(
            center, radius_km, PlaceFilter.from_query(query), query.offset, query.limit
        )
        extra = {
            "centerPoint": {"latitude": center.latitude, "longitude": center.longitude},
            "radiusKm": radius_km,
        }
        return PlacePage(hits, total, query.page, query.limit, extra)

    def _bounds(self, query: PlaceQuery) -> PlacePage:
        box = BoundingBox(query.sw_lat, query.sw_lng, query.ne_lat, query.ne_lng)
        hits, total = self.store.within_bounds(box, PlaceFilter.from_query(query), query.offset, query.limit)
        return PlacePage(hits, total, query.page, query.limit, {"bounds": box.as_meta()})

    @staticmethod
    def _empty(query: PlaceQuery, message: str) -> PlacePage:
        return PlacePage([], 0, query.page, query.limit, {"message": message})
