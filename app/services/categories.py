"""Category and tag lookups."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.errors import InvalidInputError, NotFoundError
from app.models.blog import Blog, BlogStatus
from app.models.category import Category, Tag
from app.models.place import Place, PlaceStatus

DETAIL_PREVIEW_SIZE = 10


def list_categories(db: Session) -> list[dict]:
    """Categories in display order with their place and blog counts."""
    place_counts = (
        select(Place.category_id, func.count(Place.id).label("n")).group_by(Place.category_id).subquery()
    )
    blog_counts = select(Blog.category_id, func.count(Blog.id).label("n")).group_by(Blog.category_id).subquery()
    stmt = (
        select(Category, place_counts.c.n, blog_counts.c.n)
        .outerjoin(place_counts, place_counts.c.category_id == Category.id)
        .outerjoin(blog_counts, blog_counts.c.category_id == Category.id)
        .order_by(Category.display_order.asc(), Category.id.asc())
    )
    return [
        {"category": category, "place_count": places or 0, "blog_count": blogs or 0}
        for category, places, blogs in db.execute(stmt).all()
    ]


def get_category(db: Session, category_id: int) -> tuple[Category, list[Place], list[Blog]]:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError(f"Category with ID {category_id} not found")

    places = (
        db.execute(
            select(Place)
            .where(Place.category_id == category_id, Place.status == PlaceStatus.PUBLISHED.value)
            .order_by(Place.id)
            .limit(DETAIL_PREVIEW_SIZE)
        )
        .scalars()
        .all()
    )
    blogs = (
        db.execute(
            select(Blog)
            .where(Blog.category_id == category_id, Blog.status == BlogStatus.PUBLISHED.value)
            .order_by(Blog.id)
            .limit(DETAIL_PREVIEW_SIZE)
        )
        .scalars()
        .all()
    )
    return category, places, blogs


def list_tags(db: Session) -> list[Tag]:
    return db.execute(select(Tag).order_by(Tag.name)).scalars().all()


def require_category(db: Session, category_id: int | None) -> None:
    if category_id is not None and db.get(Category, category_id) is None:
        raise InvalidInputError(f"Unknown category id {category_id}")


def load_tags(db: Session, tag_ids: Iterable[int]) -> list[Tag]:
    """Fetch tags by id; every id must exist."""
    wanted = sorted(set(tag_ids))
    if not wanted:
        return []
    tags = db.execute(select(Tag).where(Tag.id.in_(wanted)).order_by(Tag.id)).scalars().all()
    missing = set(wanted) - {tag.id for tag in tags}
    if missing:
        raise InvalidInputError(f"Unknown tag ids: {sorted(missing)}")
    return list(tags)
