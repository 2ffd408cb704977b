"""Media upload and bookkeeping; bytes go to object storage."""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Protocol

from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InvalidInputError, NotFoundError
from app.models.media import Media
from utils.s3_storage import MediaStorage

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")


class ObjectStore(Protocol):
    def upload(self, key: str, data: bytes, content_type: str) -> str: ...

    def exists(self, key: str) -> bool: ...

    def delete(self, key: str) -> None: ...


@lru_cache
def get_media_storage() -> MediaStorage:
    """Storage handle built from settings (FastAPI dependency)."""
    return MediaStorage(
        bucket_name=settings.s3_bucket_name,
        endpoint_url=settings.s3_endpoint_url,
        aws_access_key_id=settings.s3_access_key_id,
        aws_secret_access_key=settings.s3_secret_access_key,
        region=settings.s3_region,
        public_base_url=settings.s3_public_base_url,
    )


def _check_upload(data: bytes, content_type: str | None) -> None:
    if content_type not in ALLOWED_MIME_TYPES:
        raise InvalidInputError("Invalid file type. Only JPEG, PNG, and WebP are allowed")
    if not data:
        raise InvalidInputError("No file provided")
    if len(data) > settings.max_upload_bytes:
        raise InvalidInputError(f"File exceeds the {settings.max_upload_bytes} byte limit")


def _store(
    storage: ObjectStore,
    data: bytes,
    filename: str | None,
    content_type: str,
    uploaded_by: int | None,
    stamp: int,
) -> Media:
    original = filename or "upload"
    base_name = f"{stamp}-{MediaStorage.safe_name(original)}"
    key = f"original/{base_name}"
    url = storage.upload(key, data, content_type)
    return Media(
        filename=base_name,
        original_filename=original,
        mime_type=content_type,
        size=len(data),
        storage_key=key,
        url=url,
        uploaded_by=uploaded_by,
    )


def _save(db: Session, items: list[Media]) -> None:
    try:
        db.add_all(items)
        db.commit()
        for media in items:
            db.refresh(media)
    except Exception:
        db.rollback()
        raise
    for media in items:
        logger.info("media %s stored at %s", media.id, media.storage_key)


def upload_media(
    db: Session,
    storage: ObjectStore,
    data: bytes,
    filename: str | None,
    content_type: str | None,
    uploaded_by: int | None = None,
) -> Media:
    _check_upload(data, content_type)
    media = _store(storage, data, filename, content_type, uploaded_by, time.time_ns() // 1_000_000)
    _save(db, [media])
    return media


def upload_many(
    db: Session,
    storage: ObjectStore,
    files: list[tuple[bytes, str | None, str | None]],
    uploaded_by: int | None = None,
) -> list[Media]:
    """Store ``(data, filename, content_type)`` triples; all are validated first."""
    if not files:
        raise InvalidInputError("No files provided")
    if len(files) > settings.max_upload_files:
        raise InvalidInputError(f"At most {settings.max_upload_files} files per upload")
    for data, _, content_type in files:
        _check_upload(data, content_type)

    # one stamp per file keeps keys distinct within the batch
    stamp = time.time_ns() // 1_000_000
    items = [
        _store(storage, data, filename, content_type, uploaded_by, stamp + i)
        for i, (data, filename, content_type) in enumerate(files)
    ]
    _save(db, items)
    return items


def list_media(db: Session, page: int, limit: int) -> tuple[list[Media], int]:
    stmt = select(Media).order_by(Media.created_at.desc(), Media.id.desc()).offset((page - 1) * limit).limit(limit)
    items = db.execute(stmt).scalars().all()
    total = db.execute(select(func.count(Media.id))).scalar_one()
    return list(items), total


def get_media(db: Session, media_id: int) -> Media:
    media = db.get(Media, media_id)
    if media is None:
        raise NotFoundError(f"Media with ID {media_id} not found")
    return media


def delete_media(db: Session, storage: ObjectStore, media_id: int) -> None:
    """Remove the object (best effort) and then the record."""
    media = get_media(db, media_id)
    try:
        if storage.exists(media.storage_key):
            storage.delete(media.storage_key)
    except (BotoCoreError, ClientError) as exc:
        logger.warning("could not delete %s from storage: %s", media.storage_key, exc)

    try:
        db.delete(media)
        db.commit()
    except Exception:
        db.rollback()
        raise
