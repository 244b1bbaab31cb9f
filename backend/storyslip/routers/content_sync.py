"""Content-sync API router: version history, edit locks, conflict checks and cleanup.

Handlers authorize the caller through website membership and then delegate
to the version, lock and conflict services.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from storyslip.config import settings
from storyslip.database import get_db
from storyslip.middleware.auth_middleware import get_current_user, require_roles
from storyslip.models.user import User
from storyslip.schemas.content_sync import (
    CleanupOut,
    CleanupRequest,
    ConflictCheckOut,
    ConflictCheckRequest,
    LockExtendRequest,
    LockOut,
    LockReleaseOut,
)
from storyslip.schemas.version import (
    ContentRestoreResult,
    ContentVersionOut,
    VersionCompareOut,
    VersionHistoryOut,
    VersionStatsOut,
)
from storyslip.services import conflict_service, lock_service, version_service
from storyslip.services.content_service import ensure_can_edit, get_content_for_member

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/content-sync", tags=["content-sync"])


@router.get("/{website_id}/{content_id}/versions", response_model=VersionHistoryOut)
def list_versions(
    website_id: UUID,
    content_id: UUID,
    limit: int = Query(50, ge=1, le=settings.VERSION_HISTORY_MAX_LIMIT),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, _ = get_content_for_member(db, str(website_id), str(content_id), current_user)
    rows, total = version_service.list_versions(db, content.content_id, limit=limit, offset=offset)
    return {
        "items": [version_service.to_response(row) for row in rows],
        "total": total,
        "limit": limit,
        "offset": offset,
    }


# Registered ahead of /versions/{version_number} so "compare" is not read as a number.
@router.get("/{website_id}/{content_id}/versions/compare", response_model=VersionCompareOut)
def compare_versions(
    website_id: UUID,
    content_id: UUID,
    version1: int = Query(..., ge=1),
    version2: int = Query(..., ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, _ = get_content_for_member(db, str(website_id), str(content_id), current_user)
    return version_service.compare_versions(db, content.content_id, version1, version2)


@router.get("/{website_id}/{content_id}/versions/{version_number}", response_model=ContentVersionOut)
def get_version(
    website_id: UUID,
    content_id: UUID,
    version_number: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, _ = get_content_for_member(db, str(website_id), str(content_id), current_user)
    return version_service.to_response(version_service.get_version(db, content.content_id, version_number))


@router.post("/{website_id}/{content_id}/versions/{version_number}/restore", response_model=ContentRestoreResult)
def restore_version(
    website_id: UUID,
    content_id: UUID,
    version_number: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, role = get_content_for_member(db, str(website_id), str(content_id), current_user)
    ensure_can_edit(role)
    row = version_service.restore_version(db, content.content_id, version_number, current_user.user_id)
    return {
        "message": "Content restored",
        "restored_from": version_number,
        "version": version_service.to_response(row),
    }


@router.get("/{website_id}/{content_id}/lock", response_model=Optional[LockOut])
def get_lock(
    website_id: UUID,
    content_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, _ = get_content_for_member(db, str(website_id), str(content_id), current_user)
    lock = lock_service.get_active_lock(db, content.content_id)
    return lock_service.to_response(lock) if lock else None


@router.post("/{website_id}/{content_id}/lock", response_model=LockOut)
def acquire_lock(
    website_id: UUID,
    content_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, role = get_content_for_member(db, str(website_id), str(content_id), current_user)
    ensure_can_edit(role)
    lock = lock_service.acquire_lock(
        db,
        website_id=content.website_id,
        content_id=content.content_id,
        user_id=current_user.user_id,
    )
    return lock_service.to_response(lock)


@router.put("/{website_id}/{content_id}/lock", response_model=LockOut)
def extend_lock(
    website_id: UUID,
    content_id: UUID,
    data: Optional[LockExtendRequest] = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, _ = get_content_for_member(db, str(website_id), str(content_id), current_user)
    lock = lock_service.extend_lock(
        db,
        content_id=content.content_id,
        user_id=current_user.user_id,
        minutes=data.minutes if data else None,
    )
    return lock_service.to_response(lock)


@router.delete("/{website_id}/{content_id}/lock", response_model=LockReleaseOut)
def release_lock(
    website_id: UUID,
    content_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, _ = get_content_for_member(db, str(website_id), str(content_id), current_user)
    released = lock_service.release_lock(db, content_id=content.content_id, user_id=current_user.user_id)
    return {"released": released}


@router.post("/{website_id}/{content_id}/conflicts", response_model=ConflictCheckOut)
def detect_conflicts(
    website_id: UUID,
    content_id: UUID,
    data: ConflictCheckRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, _ = get_content_for_member(db, str(website_id), str(content_id), current_user)
    return conflict_service.detect_conflicts(
        db,
        content,
        user_id=current_user.user_id,
        proposed=data.model_dump(exclude={"base_version"}),
        base_version=data.base_version,
    )


@router.get("/{website_id}/{content_id}/stats", response_model=VersionStatsOut)
def version_stats(
    website_id: UUID,
    content_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, _ = get_content_for_member(db, str(website_id), str(content_id), current_user)
    return version_service.version_stats(db, content.content_id)


@router.post("/cleanup", response_model=CleanupOut)
def cleanup(
    data: Optional[CleanupRequest] = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    keep_versions = data.keep_versions if data else None
    expired = lock_service.purge_expired_locks(db)
    deleted = version_service.cleanup_versions(db, keep_versions)
    logger.info(
        "[content-sync] cleanup by user=%s expired_locks=%s old_versions=%s",
        current_user.user_id, expired, deleted,
    )
    return {"expired_locks_deleted": expired, "old_versions_deleted": deleted}
