"""Place endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InvalidInputError, NotFoundError
from app.db.session import get_db
from app.schemas.common import PageMeta
from app.schemas.place import PlaceCreate, PlaceListResponse, PlaceOut, PlaceQuery, PlaceUpdate
from app.services import places as place_service
from app.services.place_query import PlacePage, PlaceQueryEngine
from app.services.place_store import SqlPlaceStore

router = APIRouter(prefix="/places", tags=["places"])


def parse_id_list(values: list[str] | None) -> list[int] | None:
    """Accept ``?tagIds=1,2`` as well as repeated ``?tagIds=1&tagIds=2``."""
    if not values:
        return None
    ids = [int(v.strip()) for raw in values for v in raw.split(",") if v.strip().isdigit()]
    return ids or None


def place_query_params(
    page: int = 1,
    limit: int = settings.default_page_limit,
    search: str | None = None,
    category_id: int | None = Query(None, alias="categoryId"),
    place_type: str | None = Query(None, alias="placeType"),
    status: str | None = None,
    city: str | None = None,
    country: str | None = None,
    tag_ids: list[str] | None = Query(None, alias="tagIds"),
    is_featured: bool | None = Query(None, alias="isFeatured"),
    min_rating: float | None = Query(None, alias="minRating"),
    latitude: float | None = None,
    longitude: float | None = None,
    radius_km: float | None = Query(None, alias="radiusKm"),
    sw_lat: float | None = Query(None, alias="swLat"),
    sw_lng: float | None = Query(None, alias="swLng"),
    ne_lat: float | None = Query(None, alias="neLat"),
    ne_lng: float | None = Query(None, alias="neLng"),
    sort_by: str = Query("created_at", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
) -> PlaceQuery:
    """Build a validated ``PlaceQuery`` from query parameters."""
    raw = {
        "page": page,
        "limit": limit,
        "search": search,
        "category_id": category_id,
        "place_type": place_type,
        "city": city,
        "country": country,
        "tag_ids": parse_id_list(tag_ids),
        "is_featured": is_featured,
        "min_rating": min_rating,
        "latitude": latitude,
        "longitude": longitude,
        "radius_km": radius_km,
        "sw_lat": sw_lat,
        "sw_lng": sw_lng,
        "ne_lat": ne_lat,
        "ne_lng": ne_lng,
        "sort_by": sort_by,
        "sort_order": sort_order,
    }
    if status:
        raw["status"] = status
    try:
        return PlaceQuery(**raw)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.errors(include_url=False, include_context=False)) from exc


def get_query_engine(db: Session = Depends(get_db)) -> PlaceQueryEngine:
    return PlaceQueryEngine(SqlPlaceStore(db))


def to_response(page: PlacePage) -> PlaceListResponse:
    data = []
    for hit in page.hits:
        item = PlaceOut.model_validate(hit.place)
        if hit.distance_km is not None:
            item = item.model_copy(update={"distance_km": hit.distance_km})
        data.append(item)
    return PlaceListResponse(
        data=data,
        meta=PageMeta.build(page.page, page.limit, page.total, **page.extra_meta),
    )


def _run(call, query: PlaceQuery) -> PlaceListResponse:
    try:
        return to_response(call(query))
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("", response_model=PlaceListResponse)
def list_places(
    query: PlaceQuery = Depends(place_query_params),
    engine: PlaceQueryEngine = Depends(get_query_engine),
) -> PlaceListResponse:
    """List places; radius or bounds parameters switch the ranking mode."""
    return _run(engine.search, query)


@router.get("/nearby", response_model=PlaceListResponse)
def nearby_places(
    query: PlaceQuery = Depends(place_query_params),
    engine: PlaceQueryEngine = Depends(get_query_engine),
) -> PlaceListResponse:
    """Places within ``radiusKm`` of a point, nearest first."""
    return _run(engine.find_nearby, query)


@router.get("/in-bounds", response_model=PlaceListResponse)
def places_in_bounds(
    query: PlaceQuery = Depends(place_query_params),
    engine: PlaceQueryEngine = Depends(get_query_engine),
) -> PlaceListResponse:
    """Places inside the map viewport."""
    return _run(engine.find_in_bounds, query)


@router.get("/slug/{slug}", response_model=PlaceOut)
def get_place_by_slug(slug: str, db: Session = Depends(get_db)) -> PlaceOut:
    try:
        return PlaceOut.model_validate(place_service.get_place_by_slug(db, slug))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("/{place_id}", response_model=PlaceOut)
def get_place(place_id: int, db: Session = Depends(get_db)) -> PlaceOut:
    try:
        return PlaceOut.model_validate(place_service.get_place(db, place_id))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("", response_model=PlaceOut, status_code=201)
def create_place(payload: PlaceCreate, db: Session = Depends(get_db)) -> PlaceOut:
    try:
        return PlaceOut.model_validate(place_service.create_place(db, payload))
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.patch("/{place_id}", response_model=PlaceOut)
def update_place(place_id: int, payload: PlaceUpdate, db: Session = Depends(get_db)) -> PlaceOut:
    try:
        return PlaceOut.model_validate(place_service.update_place(db, place_id, payload))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/{place_id}")
def delete_place(place_id: int, db: Session = Depends(get_db)) -> dict[str, str]:
    try:
        place_service.delete_place(db, place_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"message": "Place deleted successfully"}
