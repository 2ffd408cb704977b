"""Place model."""

import enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from app.db.base import Base


class PlaceStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class PlaceType(str, enum.Enum):
    ATTRACTION = "attraction"
    RESTAURANT = "restaurant"
    HOTEL = "hotel"
    LANDMARK = "landmark"
    MUSEUM = "museum"
    BEACH = "beach"
    PARK = "park"
    OTHER = "other"


place_tags = Table(
    "place_tags",
    Base.metadata,
    Column("place_id", Integer, ForeignKey("places.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Place(Base):
    """Point of interest."""

    __tablename__ = "places"
    __table_args__ = (
        CheckConstraint("latitude IS NULL OR (latitude >= -90 AND latitude <= 90)", name="ck_places_latitude"),
        CheckConstraint("longitude IS NULL OR (longitude >= -180 AND longitude <= 180)", name="ck_places_longitude"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(300), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=False, default="")
    short_description = Column(Text)
    address = Column(Text)
    city = Column(String(120), index=True)
    state = Column(String(120))
    country = Column(String(120), index=True)
    postal_code = Column(String(20))
    latitude = Column(Float)  # null => never returned by radius/bounds queries
    longitude = Column(Float)

    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), index=True)
    place_type = Column(String(20), nullable=False, default=PlaceType.OTHER.value)
    featured_image_id = Column(Integer, ForeignKey("media.id", ondelete="SET NULL"))

    opening_hours = Column(JSON)
    contact_info = Column(JSON)
    admission_fee = Column(JSON)

    meta_title = Column(String(255))
    meta_description = Column(Text)
    keywords = Column(JSON)

    status = Column(String(20), nullable=False, default=PlaceStatus.DRAFT.value, index=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    visit_count = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)

    published_at = Column(DateTime)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="places")
    tags = relationship("Tag", secondary=place_tags, back_populates="places", order_by="Tag.id")
    featured_image = relationship("Media", foreign_keys=[featured_image_id])
