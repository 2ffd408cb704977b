"""Expose API endpoint routers."""

from app.api.endpoints import blogs, categories, media, places, search

__all__ = ["blogs", "categories", "media", "places", "search"]
