"""Media endpoints."""

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InvalidInputError, NotFoundError
from app.db.session import get_db
from app.schemas.common import PageMeta, clamp_limit, clamp_page
from app.schemas.media import MediaListResponse, MediaOut
from app.services import media as media_service
from app.services.media import ObjectStore, get_media_storage

router = APIRouter(prefix="/media", tags=["media"])


def _read(upload: UploadFile) -> tuple[bytes, str | None, str | None]:
    # one byte past the cap is enough to reject an oversized file
    data = upload.file.read(settings.max_upload_bytes + 1)
    return data, upload.filename, upload.content_type


@router.post("", response_model=MediaOut, status_code=201)
def upload_media(
    file: UploadFile = File(...),
    uploaded_by: int | None = Form(None, alias="uploadedBy"),
    db: Session = Depends(get_db),
    storage: ObjectStore = Depends(get_media_storage),
) -> MediaOut:
    """Upload one image to object storage."""
    data, filename, content_type = _read(file)
    try:
        media = media_service.upload_media(db, storage, data, filename, content_type, uploaded_by)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return MediaOut.model_validate(media)


@router.post("/upload-multiple", response_model=list[MediaOut], status_code=201)
def upload_multiple_media(
    files: list[UploadFile] = File(...),
    uploaded_by: int | None = Form(None, alias="uploadedBy"),
    db: Session = Depends(get_db),
    storage: ObjectStore = Depends(get_media_storage),
) -> list[MediaOut]:
    """Upload several images; nothing is stored if any of them is rejected."""
    if len(files) > settings.max_upload_files:
        raise HTTPException(status_code=400, detail=f"At most {settings.max_upload_files} files per upload")
    try:
        items = media_service.upload_many(db, storage, [_read(f) for f in files], uploaded_by)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return [MediaOut.model_validate(m) for m in items]


@router.get("", response_model=MediaListResponse)
def list_media(page: int = 1, limit: int = 50, db: Session = Depends(get_db)) -> MediaListResponse:
    page, limit = clamp_page(page), clamp_limit(limit)
    items, total = media_service.list_media(db, page, limit)
    return MediaListResponse(
        data=[MediaOut.model_validate(m) for m in items],
        meta=PageMeta.build(page, limit, total),
    )


@router.get("/{media_id}", response_model=MediaOut)
def get_media(media_id: int, db: Session = Depends(get_db)) -> MediaOut:
    try:
        return MediaOut.model_validate(media_service.get_media(db, media_id))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/{media_id}")
def delete_media(
    media_id: int,
    db: Session = Depends(get_db),
    storage: ObjectStore = Depends(get_media_storage),
) -> dict[str, str]:
    try:
        media_service.delete_media(db, storage, media_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"message": "Media deleted successfully"}
