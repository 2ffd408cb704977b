"""Blog CRUD, listing and the view-counting read path."""

from __future__ import annotations

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session, selectinload

from app.core.errors import InvalidInputError, NotFoundError
from app.models.blog import Blog, BlogStatus
from app.models.category import Tag
from app.models.place import Place
from app.schemas.blog import BlogCreate, BlogQuery, BlogUpdate
from app.services.categories import load_tags, require_category
from app.services.slug import generate_slug

SORT_FIELDS = {
    "created_at": "created_at",
    "createdAt": "created_at",
    "published_at": "published_at",
    "publishedAt": "published_at",
    "title": "title",
    "view_count": "view_count",
    "viewCount": "view_count",
}
NOT_NULL_FIELDS = {"title", "content", "status", "is_featured"}


def _with_relations(stmt):
    return stmt.options(
        selectinload(Blog.category),
        selectinload(Blog.tags),
        selectinload(Blog.related_places),
        selectinload(Blog.featured_image),
    )


def _load_places(db: Session, place_ids: list[int]) -> list[Place]:
    wanted = sorted(set(place_ids))
    if not wanted:
        return []
    places = db.execute(select(Place).where(Place.id.in_(wanted))).scalars().all()
    missing = set(wanted) - {place.id for place in places}
    if missing:
        raise InvalidInputError(f"Unknown place ids: {sorted(missing)}")
    return list(places)


def list_blogs(db: Session, query: BlogQuery) -> tuple[list[Blog], int]:
    conds = [Blog.status == query.status.value]
    if query.search:
        conds.append(
            or_(*(col.icontains(query.search, autoescape=True) for col in (Blog.title, Blog.content, Blog.excerpt)))
        )
    if query.category_id is not None:
        conds.append(Blog.category_id == query.category_id)
    if query.is_featured is not None:
        conds.append(Blog.is_featured.is_(query.is_featured))
    if query.tag_ids:
        conds.append(Blog.tags.any(Tag.id.in_(query.tag_ids)))

    column = getattr(Blog, SORT_FIELDS.get(query.sort_by, "created_at"))
    order = column.asc() if query.sort_order.lower() == "asc" else column.desc()
    blogs = (
        db.execute(
            _with_relations(select(Blog))
            .where(*conds)
            .order_by(order, Blog.id.asc())
            .offset(query.offset)
            .limit(query.limit)
        )
        .scalars()
        .all()
    )
    total = db.execute(select(func.count(Blog.id)).where(*conds)).scalar_one()
    return list(blogs), total


def _bump_views(db: Session, blog: Blog) -> Blog:
    db.execute(update(Blog).where(Blog.id == blog.id).values(view_count=Blog.view_count + 1))
    db.commit()
    db.refresh(blog)
    return blog


def get_blog(db: Session, blog_id: int, count_view: bool = True) -> Blog:
    blog = db.execute(_with_relations(select(Blog)).where(Blog.id == blog_id)).scalar_one_or_none()
    if blog is None:
        raise NotFoundError(f"Blog with ID {blog_id} not found")
    return _bump_views(db, blog) if count_view else blog


def get_blog_by_slug(db: Session, slug: str) -> Blog:
    blog = db.execute(_with_relations(select(Blog)).where(Blog.slug == slug)).scalar_one_or_none()
    if blog is None:
        raise NotFoundError(f'Blog with slug "{slug}" not found')
    return _bump_views(db, blog)


def create_blog(db: Session, payload: BlogCreate) -> Blog:
    data = payload.model_dump(exclude={"tag_ids", "related_place_ids"}, mode="json")
    try:
        require_category(db, payload.category_id)
        blog = Blog(**data, slug=generate_slug(payload.title))
        blog.tags = load_tags(db, payload.tag_ids)
        blog.related_places = _load_places(db, payload.related_place_ids)
        if payload.status is BlogStatus.PUBLISHED:
            blog.published_at = func.now()
        db.add(blog)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_blog(db, blog.id, count_view=False)


def update_blog(db: Session, blog_id: int, payload: BlogUpdate) -> Blog:
    blog = get_blog(db, blog_id, count_view=False)
    data = {
        key: value
        for key, value in payload.model_dump(
            exclude_unset=True, exclude={"tag_ids", "related_place_ids"}, mode="json"
        ).items()
        if value is not None or key not in NOT_NULL_FIELDS
    }
    try:
        if "category_id" in data:
            require_category(db, data["category_id"])
        for key, value in data.items():
            setattr(blog, key, value)
        if payload.title:
            blog.slug = generate_slug(payload.title)
        if payload.status is BlogStatus.PUBLISHED:
            blog.published_at = func.now()
        if payload.tag_ids is not None:
            blog.tags = load_tags(db, payload.tag_ids)
        if payload.related_place_ids is not None:
            blog.related_places = _load_places(db, payload.related_place_ids)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_blog(db, blog_id, count_view=False)


def delete_blog(db: Session, blog_id: int) -> None:
    blog = db.get(Blog, blog_id)
    if blog is None:
        raise NotFoundError(f"Blog with ID {blog_id} not found")
    try:
        db.delete(blog)
        db.commit()
    except Exception:
        db.rollback()
        raise
