"""Website and website membership models. Membership roles gate access to content."""

from uuid import uuid4

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from storyslip.database import Base


class Website(Base):
    __tablename__ = "websites"

    website_id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(200), nullable=False)
    domain = Column(String(255))
    owner_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    members = relationship("WebsiteMember", back_populates="website", cascade="all, delete-orphan")
    contents = relationship("Content", back_populates="website", cascade="all, delete-orphan")


class WebsiteMember(Base):
    __tablename__ = "website_members"

    member_id = Column(Integer, primary_key=True, autoincrement=True)
    website_id = Column(String(36), ForeignKey("websites.website_id"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    role = Column(String(20), nullable=False)  # owner/admin/editor/viewer
    created_at = Column(DateTime, server_default=func.now())

    website = relationship("Website", back_populates="members")
    user = relationship("User", back_populates="memberships")

    __table_args__ = (
        UniqueConstraint("website_id", "user_id", name="uq_website_member"),
    )
