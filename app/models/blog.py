"""Blog model."""

import enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Table, Text, func
from sqlalchemy.orm import relationship

from app.db.base import Base


class BlogStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


blog_tags = Table(
    "blog_tags",
    Base.metadata,
    Column("blog_id", Integer, ForeignKey("blogs.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

# places mentioned in a blog post
blog_places = Table(
    "blog_places",
    Base.metadata,
    Column("blog_id", Integer, ForeignKey("blogs.id", ondelete="CASCADE"), primary_key=True),
    Column("place_id", Integer, ForeignKey("places.id", ondelete="CASCADE"), primary_key=True),
)


class Blog(Base):
    """Travel article."""

    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(300), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(Text)
    author_name = Column(String(100))
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), index=True)
    featured_image_id = Column(Integer, ForeignKey("media.id", ondelete="SET NULL"))
    read_time = Column(Integer)  # minutes

    meta_title = Column(String(255))
    meta_description = Column(Text)
    keywords = Column(JSON)

    status = Column(String(20), nullable=False, default=BlogStatus.DRAFT.value, index=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    view_count = Column(Integer, nullable=False, default=0)

    published_at = Column(DateTime)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="blogs")
    tags = relationship("Tag", secondary=blog_tags, back_populates="blogs", order_by="Tag.id")
    related_places = relationship("Place", secondary=blog_places, order_by="Place.id")
    featured_image = relationship("Media", foreign_keys=[featured_image_id])
    comments = relationship("Comment", back_populates="blog", cascade="all, delete-orphan")
