"""Pydantic schemas for websites and memberships."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class WebsiteCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    domain: Optional[str] = None


class WebsiteOut(BaseModel):
    website_id: str
    name: str
    domain: Optional[str] = None
    owner_id: str
    created_at: datetime
    role: Optional[str] = None

    model_config = {"from_attributes": True}


class MemberCreate(BaseModel):
    email: str
    role: Literal["admin", "editor", "viewer"] = "editor"


class MemberOut(BaseModel):
    member_id: int
    website_id: str
    user_id: str
    role: str
    created_at: datetime

    model_config = {"from_attributes": True}
