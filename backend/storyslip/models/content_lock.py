"""Edit lock rows. One row per content item; an expired row counts as no lock."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index

from storyslip.database import Base


class ContentLock(Base):
    __tablename__ = "content_locks"

    lock_id = Column(Integer, primary_key=True, autoincrement=True)
    content_id = Column(String(36), ForeignKey("content.content_id"), unique=True, nullable=False)
    website_id = Column(String(36), ForeignKey("websites.website_id"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    locked_at = Column(DateTime, nullable=False)
    last_activity = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)

    __table_args__ = (
        Index("idx_content_lock_expires", "expires_at"),
    )
