"""User model: authenticated accounts with a global role."""

from uuid import uuid4

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from storyslip.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default="user")  # admin/user
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())

    memberships = relationship("WebsiteMember", back_populates="user")
