"""Global text search and trending content."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from app.models.blog import Blog, BlogStatus
from app.models.place import Place, PlaceStatus

SEARCH_TYPES = ("places", "blogs")
TRENDING_SIZE = 10


def _matches(term: str, *columns):
    """Case-insensitive literal substring match on any of ``columns``."""
    return or_(*(col.icontains(term, autoescape=True) for col in columns))


def search(db: Session, q: str | None, limit: int = 20, type_: str | None = None) -> dict:
    """Search published places and blogs by substring."""
    term = (q or "").strip()
    if not term:
        return {"query": term, "places": [], "blogs": [], "total": 0}

    places: list[Place] = []
    blogs: list[Blog] = []

    if type_ in (None, "places"):
        stmt = (
            select(Place)
            .options(selectinload(Place.category), selectinload(Place.tags), selectinload(Place.featured_image))
            .where(
                Place.status == PlaceStatus.PUBLISHED.value,
                _matches(term, Place.name, Place.description, Place.city, Place.country),
            )
            .order_by(Place.rating.desc(), Place.visit_count.desc(), Place.id.asc())
            .limit(limit)
        )
        places = list(db.execute(stmt).scalars().all())

    if type_ in (None, "blogs"):
        stmt = (
            select(Blog)
            .where(
                Blog.status == BlogStatus.PUBLISHED.value,
                _matches(term, Blog.title, Blog.content, Blog.excerpt),
            )
            .order_by(Blog.view_count.desc(), Blog.created_at.desc(), Blog.id.asc())
            .limit(limit)
        )
        blogs = list(db.execute(stmt).scalars().all())

    return {"query": term, "places": places, "blogs": blogs, "total": len(places) + len(blogs)}


def trending(db: Session) -> dict:
    places = db.execute(
        select(Place)
        .where(Place.status == PlaceStatus.PUBLISHED.value)
        .order_by(Place.visit_count.desc(), Place.id.asc())
        .limit(TRENDING_SIZE)
    ).scalars().all()
    blogs = db.execute(
        select(Blog)
        .where(Blog.status == BlogStatus.PUBLISHED.value)
        .order_by(Blog.view_count.desc(), Blog.id.asc())
        .limit(TRENDING_SIZE)
    ).scalars().all()
    return {"trending_places": list(places), "trending_blogs": list(blogs)}
