"""Blog comment model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.db.base import Base


class Comment(Base):
    """Reader comment; stays pending until moderated."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    blog_id = Column(Integer, ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False, index=True)
    author_name = Column(String(100))
    author_email = Column(String(255))
    content = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)  # pending | approved | rejected
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    blog = relationship("Blog", back_populates="comments")
