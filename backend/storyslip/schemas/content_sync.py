"""Request/response schemas for edit locks, conflict checks and cleanup."""

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field

from storyslip.schemas.version import ContentVersionOut


class LockOut(BaseModel):
    content_id: str
    website_id: str
    locked_by: str
    locked_at: datetime
    last_activity: datetime
    expires_at: datetime


class LockExtendRequest(BaseModel):
    minutes: Optional[int] = Field(None, ge=1)


class LockReleaseOut(BaseModel):
    released: bool


class ConflictCheckRequest(BaseModel):
    title: str = Field(min_length=1)
    body: str = Field(min_length=1)
    excerpt: Optional[str] = None
    base_version: Optional[int] = Field(
        None, ge=1, validation_alias=AliasChoices("base_version", "baseVersion"),
    )


class FieldConflict(BaseModel):
    field: str
    base_value: Any = None
    current_value: Any = None
    proposed_value: Any = None


class ConflictCheckOut(BaseModel):
    status: Literal["clean", "lock_conflict", "version_conflict"]
    has_conflicts: bool
    latest_version: int
    base_version: Optional[int] = None
    conflicts: List[FieldConflict]
    base_snapshot: Optional[ContentVersionOut] = None
    current_version: Optional[ContentVersionOut] = None
    lock: Optional[LockOut] = None


class CleanupRequest(BaseModel):
    keep_versions: Optional[int] = Field(
        None, ge=1, validation_alias=AliasChoices("keep_versions", "keepVersions"),
    )


class CleanupOut(BaseModel):
    expired_locks_deleted: int
    old_versions_deleted: int
