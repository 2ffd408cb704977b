"""Schemas for media records."""

from datetime import datetime

from pydantic import BaseModel

from app.schemas.common import CAMEL_CONFIG, PageMeta


class MediaBrief(BaseModel):
    id: int
    url: str

    model_config = CAMEL_CONFIG


class MediaOut(MediaBrief):
    filename: str
    original_filename: str
    mime_type: str
    size: int
    uploaded_by: int | None = None
    created_at: datetime | None = None


class MediaListResponse(BaseModel):
    data: list[MediaOut]
    meta: PageMeta

    model_config = CAMEL_CONFIG
