"""Category and tag endpoints (read only)."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.session import get_db
from app.schemas.blog import BlogSummary
from app.schemas.category import CategoryBrief, CategoryOut, TagOut
from app.schemas.common import CAMEL_CONFIG
from app.schemas.place import PlaceSummary
from app.services import categories as category_service

router = APIRouter(tags=["categories"])


class CategoryDetail(CategoryBrief):
    description: str | None = None
    display_order: int = 0
    places: list[PlaceSummary]
    blogs: list[BlogSummary]

    model_config = CAMEL_CONFIG


@router.get("/categories", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db)) -> list[CategoryOut]:
    rows = category_service.list_categories(db)
    return [
        CategoryOut.model_validate(row["category"]).model_copy(
            update={"place_count": row["place_count"], "blog_count": row["blog_count"]}
        )
        for row in rows
    ]


@router.get("/categories/{category_id}", response_model=CategoryDetail)
def get_category(category_id: int, db: Session = Depends(get_db)) -> CategoryDetail:
    try:
        category, places, blogs = category_service.get_category(db, category_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    base = CategoryOut.model_validate(category)
    return CategoryDetail(
        **base.model_dump(exclude={"place_count", "blog_count"}),
        places=[PlaceSummary.model_validate(p) for p in places],
        blogs=[BlogSummary.model_validate(b) for b in blogs],
    )


@router.get("/tags", response_model=list[TagOut])
def list_tags(db: Session = Depends(get_db)) -> list[TagOut]:
    return [TagOut.model_validate(t) for t in category_service.list_tags(db)]
