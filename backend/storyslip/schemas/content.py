"""Pydantic schemas for content rows."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, Field

ContentStatus = Literal["draft", "published", "archived"]


class ContentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    body: str = Field(min_length=1)
    excerpt: Optional[str] = None
    status: ContentStatus = "draft"


class ContentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    body: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = None
    status: Optional[ContentStatus] = None
    base_version: Optional[int] = Field(
        None, ge=1, validation_alias=AliasChoices("base_version", "baseVersion"),
    )


class ContentOut(BaseModel):
    content_id: str
    website_id: str
    title: str
    body: str
    excerpt: Optional[str] = None
    status: str
    version_number: int
    author_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
