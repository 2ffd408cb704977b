"""Root API router."""

from fastapi import APIRouter

from app.api.endpoints import blogs, categories, media, places, search

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "ok"}


router.include_router(places.router)
router.include_router(blogs.router)
router.include_router(categories.router)
router.include_router(search.router)
router.include_router(media.router)
