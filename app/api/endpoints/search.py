"""Global search endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.search import SearchResponse, TrendingResponse
from app.services import search as search_service

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResponse)
def search(
    q: str | None = None,
    limit: int = Query(20, ge=1, le=100),
    type: str | None = None,
    db: Session = Depends(get_db),
) -> SearchResponse:
    """Search published places and blogs."""
    if type is not None and type not in search_service.SEARCH_TYPES:
        raise HTTPException(status_code=400, detail=f"type must be one of {search_service.SEARCH_TYPES}")
    return SearchResponse.model_validate(search_service.search(db, q, limit, type))


@router.get("/trending", response_model=TrendingResponse)
def trending(db: Session = Depends(get_db)) -> TrendingResponse:
    return TrendingResponse.model_validate(search_service.trending(db))
