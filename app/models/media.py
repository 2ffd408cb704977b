"""Uploaded media metadata (the bytes live in object storage)."""

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, Text, func

from app.db.base import Base


class Media(Base):
    __tablename__ = "media"

    id = Column(Integer, primary_key=True, index=True)
    filename = Column(String(255), nullable=False)
    original_filename = Column(String(255), nullable=False)
    mime_type = Column(String(50), nullable=False)
    size = Column(BigInteger, nullable=False)
    storage_key = Column(String(400), nullable=False, unique=True)
    url = Column(Text, nullable=False)
    uploaded_by = Column(Integer)  # user id from the auth service
    created_at = Column(DateTime, nullable=False, server_default=func.now())
