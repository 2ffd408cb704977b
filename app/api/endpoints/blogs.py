"""Blog and comment endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.endpoints.places import parse_id_list
from app.core.config import settings
from app.core.errors import InvalidInputError, NotFoundError
from app.db.session import get_db
from app.schemas.blog import (
    BlogCreate,
    BlogListResponse,
    BlogOut,
    BlogQuery,
    BlogUpdate,
    CommentCreate,
    CommentOut,
)
from app.schemas.common import PageMeta
from app.services import blogs as blog_service
from app.services import comments as comment_service

router = APIRouter(prefix="/blogs", tags=["blogs"])


def blog_query_params(
    page: int = 1,
    limit: int = settings.default_page_limit,
    search: str | None = None,
    category_id: int | None = Query(None, alias="categoryId"),
    status: str | None = None,
    is_featured: bool | None = Query(None, alias="isFeatured"),
    tag_ids: list[str] | None = Query(None, alias="tagIds"),
    sort_by: str = Query("created_at", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
) -> BlogQuery:
    raw = {
        "page": page,
        "limit": limit,
        "search": search,
        "category_id": category_id,
        "is_featured": is_featured,
        "tag_ids": parse_id_list(tag_ids),
        "sort_by": sort_by,
        "sort_order": sort_order,
    }
    if status:
        raw["status"] = status
    try:
        return BlogQuery(**raw)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.errors(include_url=False, include_context=False)) from exc


@router.get("", response_model=BlogListResponse)
def list_blogs(query: BlogQuery = Depends(blog_query_params), db: Session = Depends(get_db)) -> BlogListResponse:
    blogs, total = blog_service.list_blogs(db, query)
    return BlogListResponse(
        data=[BlogOut.model_validate(b) for b in blogs],
        meta=PageMeta.build(query.page, query.limit, total),
    )


@router.get("/slug/{slug}", response_model=BlogOut)
def get_blog_by_slug(slug: str, db: Session = Depends(get_db)) -> BlogOut:
    try:
        return BlogOut.model_validate(blog_service.get_blog_by_slug(db, slug))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("/{blog_id}", response_model=BlogOut)
def get_blog(blog_id: int, db: Session = Depends(get_db)) -> BlogOut:
    try:
        return BlogOut.model_validate(blog_service.get_blog(db, blog_id))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("", response_model=BlogOut, status_code=201)
def create_blog(payload: BlogCreate, db: Session = Depends(get_db)) -> BlogOut:
    try:
        return BlogOut.model_validate(blog_service.create_blog(db, payload))
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.patch("/{blog_id}", response_model=BlogOut)
def update_blog(blog_id: int, payload: BlogUpdate, db: Session = Depends(get_db)) -> BlogOut:
    try:
        return BlogOut.model_validate(blog_service.update_blog(db, blog_id, payload))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/{blog_id}")
def delete_blog(blog_id: int, db: Session = Depends(get_db)) -> dict[str, str]:
    try:
        blog_service.delete_blog(db, blog_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"message": "Blog deleted successfully"}


@router.get("/{blog_id}/comments", response_model=list[CommentOut])
def list_comments(blog_id: int, db: Session = Depends(get_db)) -> list[CommentOut]:
    """Approved comments, newest first."""
    try:
        comments = comment_service.list_approved_comments(db, blog_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return [CommentOut.model_validate(c) for c in comments]


@router.post("/{blog_id}/comments", response_model=CommentOut, status_code=201)
def create_comment(blog_id: int, payload: CommentCreate, db: Session = Depends(get_db)) -> CommentOut:
    """Submit a comment; it stays pending until moderated."""
    try:
        return CommentOut.model_validate(comment_service.create_comment(db, blog_id, payload))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
