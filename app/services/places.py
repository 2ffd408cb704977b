"""Place writes and the single-record read path."""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from app.core.errors import NotFoundError
from app.models.place import Place, PlaceStatus
from app.schemas.place import PlaceCreate, PlaceUpdate
from app.services.categories import load_tags, require_category
from app.services.slug import generate_slug

NOT_NULL_FIELDS = {"name", "description", "place_type", "status", "is_featured"}


def _detail_stmt():
    return select(Place).options(
        selectinload(Place.category),
        selectinload(Place.tags),
        selectinload(Place.featured_image),
    )


def _bump_visits(db: Session, place: Place) -> Place:
    # atomic increment; concurrent fetches may race but never lose the row
    db.execute(update(Place).where(Place.id == place.id).values(visit_count=Place.visit_count + 1))
    db.commit()
    db.refresh(place)
    return place


def get_place(db: Session, place_id: int, count_visit: bool = True) -> Place:
    place = db.execute(_detail_stmt().where(Place.id == place_id)).scalar_one_or_none()
    if place is None:
        raise NotFoundError(f"Place with ID {place_id} not found")
    return _bump_visits(db, place) if count_visit else place


def get_place_by_slug(db: Session, slug: str) -> Place:
    place = db.execute(_detail_stmt().where(Place.slug == slug)).scalar_one_or_none()
    if place is None:
        raise NotFoundError(f'Place with slug "{slug}" not found')
    return _bump_visits(db, place)


def create_place(db: Session, payload: PlaceCreate) -> Place:
    """Insert a place with a generated slug."""
    data = payload.model_dump(exclude={"tag_ids"}, mode="json")
    try:
        require_category(db, payload.category_id)
        place = Place(**data, slug=generate_slug(payload.name))
        place.tags = load_tags(db, payload.tag_ids)
        if payload.status is PlaceStatus.PUBLISHED:
            place.published_at = func.now()
        db.add(place)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_place(db, place.id, count_visit=False)


def update_place(db: Session, place_id: int, payload: PlaceUpdate) -> Place:
    """Apply the fields present in ``payload``."""
    place = get_place(db, place_id, count_visit=False)
    data = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True, exclude={"tag_ids"}, mode="json").items()
        if value is not None or key not in NOT_NULL_FIELDS
    }
    try:
        if "category_id" in data:
            require_category(db, data["category_id"])
        for key, value in data.items():
            setattr(place, key, value)
        if payload.name:
            place.slug = generate_slug(payload.name)
        if payload.status is PlaceStatus.PUBLISHED:
            place.published_at = func.now()
        if payload.tag_ids is not None:
            place.tags = load_tags(db, payload.tag_ids)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_place(db, place_id, count_visit=False)


def delete_place(db: Session, place_id: int) -> None:
    place = db.get(Place, place_id)
    if place is None:
        raise NotFoundError(f"Place with ID {place_id} not found")
    try:
        db.delete(place)
        db.commit()
    except Exception:
        db.rollback()
        raise
