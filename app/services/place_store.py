"""Storage port for place queries and its SQLAlchemy implementation.

The query engine only talks to ``PlaceStore``; the SQL side evaluates
distances with the ``haversine_km`` database function so radius searches stay
server side.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session, selectinload

from app.models.category import Tag
from app.models.place import Place
from app.schemas.place import PlaceQuery
from app.services.geo import BoundingBox, GeoPoint, radius_prefilter


@dataclass(frozen=True)
class PlaceFilter:
    """Scalar predicates shared by all three query modes."""

    status: str
    search: str | None = None
    category_id: int | None = None
    place_type: str | None = None
    city: str | None = None
    country: str | None = None
    tag_ids: tuple[int, ...] = ()
    is_featured: bool | None = None
    min_rating: float | None = None

    @classmethod
    def from_query(cls, query: PlaceQuery) -> "PlaceFilter":
        return cls(
            status=query.status.value,
            search=query.search,
            category_id=query.category_id,
            place_type=query.place_type.value if query.place_type else None,
            city=query.city,
            country=query.country,
            tag_ids=tuple(query.tag_ids or ()),
            is_featured=query.is_featured,
            min_rating=query.min_rating,
        )


@dataclass(frozen=True)
class SortSpec:
    field: str
    descending: bool = True


@dataclass
class PlaceHit:
    place: Place
    distance_km: float | None = None


class PlaceStore(Protocol):
    def find(
        self, flt: PlaceFilter, sort: SortSpec, offset: int, limit: int
    ) -> tuple[list[PlaceHit], int]: ...

    def within_radius(
        self, center: GeoPoint, radius_km: float, flt: PlaceFilter, offset: int, limit: int
    ) -> tuple[list[PlaceHit], int]: ...

    def within_bounds(
        self, box: BoundingBox, flt: PlaceFilter, offset: int, limit: int
    ) -> tuple[list[PlaceHit], int]: ...


def _with_relations(stmt: Select) -> Select:
    return stmt.options(
        selectinload(Place.category),
        selectinload(Place.tags),
        selectinload(Place.featured_image),
    )


def _contains(column, value: str):
    # % and _ in user text match literally
    return column.icontains(value, autoescape=True)


class SqlPlaceStore:
    """``PlaceStore`` over a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    @staticmethod
    def conditions(flt: PlaceFilter) -> list:
        conds = [Place.status == flt.status]
        if flt.search:
            conds.append(
                or_(
                    _contains(Place.name, flt.search),
                    _contains(Place.description, flt.search),
                    _contains(Place.city, flt.search),
                )
            )
        if flt.category_id is not None:
            conds.append(Place.category_id == flt.category_id)
        if flt.place_type:
            conds.append(Place.place_type == flt.place_type)
        if flt.city:
            conds.append(_contains(Place.city, flt.city))
        if flt.country:
            conds.append(_contains(Place.country, flt.country))
        if flt.tag_ids:
            conds.append(Place.tags.any(Tag.id.in_(flt.tag_ids)))
        if flt.is_featured is not None:
            conds.append(Place.is_featured.is_(flt.is_featured))
        if flt.min_rating is not None:
            conds.append(Place.rating >= flt.min_rating)
        return conds

    def _count(self, conds: list) -> int:
        return self.db.execute(select(func.count(Place.id)).where(*conds)).scalar_one()

    def find(self, flt: PlaceFilter, sort: SortSpec, offset: int, limit: int) -> tuple[list[PlaceHit], int]:
        conds = self.conditions(flt)
        column = getattr(Place, sort.field)
        stmt = (
            _with_relations(select(Place))
            .where(*conds)
            .order_by(column.desc() if sort.descending else column.asc(), Place.id.asc())
            .offset(offset)
            .limit(limit)
        )
        places = self.db.execute(stmt).scalars().all()
        return [PlaceHit(place) for place in places], self._count(conds)

    def within_radius(
        self, center: GeoPoint, radius_km: float, flt: PlaceFilter, offset: int, limit: int
    ) -> tuple[list[PlaceHit], int]:
        distance = func.haversine_km(Place.latitude, Place.longitude, center.latitude, center.longitude)
        (lat_min, lat_max), lng_range = radius_prefilter(center, radius_km)

        conds = self.conditions(flt) + [
            Place.latitude.is_not(None),
            Place.longitude.is_not(None),
            Place.latitude.between(lat_min, lat_max),
        ]
        if lng_range is not None:
            conds.append(Place.longitude.between(*lng_range))
        conds.append(distance <= radius_km)

        distance_col = distance.label("distance_km")
        stmt = (
            _with_relations(select(Place, distance_col))
            .where(*conds)
            .order_by(distance_col.asc(), Place.id.asc())
            .offset(offset)
            .limit(limit)
        )
        rows = self.db.execute(stmt).all()
        return [PlaceHit(place, float(dist)) for place, dist in rows], self._count(conds)

    def within_bounds(
        self, box: BoundingBox, flt: PlaceFilter, offset: int, limit: int
    ) -> tuple[list[PlaceHit], int]:
        conds = self.conditions(flt) + [
            Place.latitude.is_not(None),
            Place.longitude.is_not(None),
            Place.latitude.between(box.sw_lat, box.ne_lat),
            Place.longitude.between(box.sw_lng, box.ne_lng),
        ]
        stmt = (
            _with_relations(select(Place))
            .where(*conds)
            .order_by(Place.rating.desc(), Place.visit_count.desc(), Place.id.asc())
            .offset(offset)
            .limit(limit)
        )
        places = self.db.execute(stmt).scalars().all()
        return [PlaceHit(place) for place in places], self._count(conds)
