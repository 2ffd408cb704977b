"""Blog comments. Approval happens in the moderation tool, not here."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.models.blog import Blog
from app.models.comment import Comment
from app.schemas.blog import CommentCreate


def _require_blog(db: Session, blog_id: int) -> None:
    if db.get(Blog, blog_id) is None:
        raise NotFoundError(f"Blog with ID {blog_id} not found")


def create_comment(db: Session, blog_id: int, payload: CommentCreate) -> Comment:
    """Store a comment as pending."""
    _require_blog(db, blog_id)
    comment = Comment(blog_id=blog_id, status="pending", **payload.model_dump())
    try:
        db.add(comment)
        db.commit()
        db.refresh(comment)
    except Exception:
        db.rollback()
        raise
    return comment


def list_approved_comments(db: Session, blog_id: int) -> list[Comment]:
    _require_blog(db, blog_id)
    stmt = (
        select(Comment)
        .where(Comment.blog_id == blog_id, Comment.status == "approved")
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    return list(db.execute(stmt).scalars().all())
