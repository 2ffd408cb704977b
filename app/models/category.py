"""Category and tag models."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.blog import blog_tags
from app.models.place import place_tags


class Category(Base):
    """Shared classification for places and blogs."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(120), nullable=False, unique=True)
    description = Column(Text)
    icon = Column(String(20))
    display_order = Column(Integer, nullable=False, default=0)

    places = relationship("Place", back_populates="category")
    blogs = relationship("Blog", back_populates="category")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(120), nullable=False, unique=True)

    places = relationship("Place", secondary=place_tags, back_populates="tags")
    blogs = relationship("Blog", secondary=blog_tags, back_populates="tags")
