"""Response schemas for content version history."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class ContentVersionOut(BaseModel):
    version_id: int
    content_id: str
    version_number: int
    title: str
    body: str
    excerpt: Optional[str] = None
    change_type: str
    author_id: str
    created_at: Optional[datetime] = None


class VersionHistoryOut(BaseModel):
    items: List[ContentVersionOut]
    total: int
    limit: int
    offset: int


class VersionCompareOut(BaseModel):
    content_id: str
    version1: ContentVersionOut
    version2: ContentVersionOut
    changed_fields: List[str]


class VersionStatsOut(BaseModel):
    content_id: str
    total_versions: int
    latest_version: int
    first_created: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    contributors: List[str]


class ContentRestoreResult(BaseModel):
    message: str
    restored_from: int
    version: ContentVersionOut
