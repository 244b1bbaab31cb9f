"""Immutable content snapshots, one row per recorded version."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from storyslip.database import Base


class ContentVersion(Base):
    __tablename__ = "content_version"

    version_id = Column(Integer, primary_key=True, autoincrement=True)
    content_id = Column(String(36), ForeignKey("content.content_id"), nullable=False)
    version_number = Column(Integer, nullable=False)
    title = Column(String(300), nullable=False)
    body = Column(Text, nullable=False)
    excerpt = Column(Text)
    change_type = Column(String(20), nullable=False)  # create/update/restore
    author_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    content = relationship("Content", back_populates="versions")

    __table_args__ = (
        # Two writers can never land on the same number for one content item.
        UniqueConstraint("content_id", "version_number", name="uq_content_version_number"),
    )
