"""Content model. `version_number` is the watermark of the latest recorded version."""

from uuid import uuid4

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from storyslip.database import Base


class Content(Base):
    __tablename__ = "content"

    content_id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    website_id = Column(String(36), ForeignKey("websites.website_id"), nullable=False)
    title = Column(String(300), nullable=False)
    body = Column(Text, nullable=False)
    excerpt = Column(Text)
    status = Column(String(20), nullable=False, default="draft")  # draft/published/archived
    version_number = Column(Integer, nullable=False, default=0)
    author_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    website = relationship("Website", back_populates="contents")
    versions = relationship("ContentVersion", back_populates="content", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_content_website", "website_id", "status"),
    )
