"""Content version store: append-only snapshots keyed by (content_id, version_number)."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storyslip.config import settings
from storyslip.models.content import Content
from storyslip.models.content_version import ContentVersion
from storyslip.services import lock_service
from storyslip.utils.errors import DatabaseError, LockConflict, NotFound, ValidationError, VersionConflict
from storyslip.utils.helpers import SNAPSHOT_FIELDS, changed_fields, snapshot_of

logger = logging.getLogger(__name__)

CONTENT_FIELDS = ("title", "body", "excerpt", "status")

VERSION_CONFLICT = "version_conflict"


def latest_version_number(db: Session, content_id: str) -> int:
    current_max = (
        db.query(func.max(ContentVersion.version_number))
        .filter(ContentVersion.content_id == content_id)
        .scalar()
    )
    return int(current_max or 0)


def _field_conflicts(
    proposed: Dict[str, Any],
    current: Dict[str, Any],
    base: Optional[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    conflicts = []
    for field in SNAPSHOT_FIELDS:
        value = proposed.get(field)
        if value is None or value == current.get(field):
            continue
        conflicts.append({
            "field": field,
            "base_value": base.get(field) if base is not None else None,
            "current_value": current.get(field),
            "proposed_value": value,
        })
    return conflicts


def check_base_version(base_version: Optional[int], latest: int) -> None:
    if base_version is not None and base_version > latest:
        raise ValidationError(f"base_version {base_version} is ahead of the latest version {latest}")


def stale_base_report(
    db: Session,
    content: Content,
    *,
    base_version: int,
    latest: int,
    proposed: Dict[str, Any],
) -> Dict[str, Any]:
    """Describe an edit made against ``base_version`` while ``latest`` is newer."""
    current_row = find_version(db, content.content_id, latest)
    base_row = find_version(db, content.content_id, base_version)
    current = snapshot_of(current_row) if current_row is not None else snapshot_of(content)
    base = snapshot_of(base_row) if base_row is not None else None
    return {
        "status": VERSION_CONFLICT,
        "has_conflicts": True,
        "latest_version": latest,
        "base_version": base_version,
        "conflicts": _field_conflicts(proposed, current, base),
        "base_snapshot": to_response(base_row) if base_row is not None else None,
        "current_version": to_response(current_row) if current_row is not None else None,
        "lock": None,
    }


def record_version(
    db: Session,
    content_id: str,
    *,
    author_id: str,
    change_type: str,
    updates: Dict[str, Any],
    base_version: Optional[int] = None,
) -> ContentVersion:
    """Apply ``updates`` to the content row and append the resulting snapshot.

    The content row is read FOR UPDATE so writers queue on databases that
    support row locks. While it is held the edit is checked against
    ``base_version`` and against another user's active edit lock, so the
    check and the write see the same state. The unique
    (content_id, version_number) constraint catches the rest; a collision
    rolls back and recomputes the number.
    """
    attempts = max(1, settings.VERSION_WRITE_RETRIES)
    for attempt in range(1, attempts + 1):
        content = (
            db.query(Content)
            .filter(Content.content_id == content_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if not content:
            raise NotFound("Content not found")

        latest = latest_version_number(db, content_id)
        try:
            check_base_version(base_version, latest)
            if base_version is not None and base_version < latest:
                report = stale_base_report(
                    db, content, base_version=base_version, latest=latest, proposed=updates,
                )
                logger.info(
                    "[version] stale save refused content=%s user=%s base=%s latest=%s",
                    content_id, author_id, base_version, latest,
                )
                raise VersionConflict(report)
            lock_service.ensure_not_locked_by_other(db, content_id=content_id, user_id=author_id)
        except (ValidationError, VersionConflict, LockConflict):
            db.rollback()
            raise

        for key, value in updates.items():
            if key in CONTENT_FIELDS:
                setattr(content, key, value)

        version_number = latest + 1
        row = ContentVersion(
            content_id=content_id,
            version_number=version_number,
            change_type=change_type,
            author_id=author_id,
            **snapshot_of(content),
        )
        content.version_number = version_number
        db.add(row)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                "[version] number %s already taken for content=%s, retrying (%s/%s)",
                version_number, content_id, attempt, attempts,
            )
            continue
        db.refresh(row)
        logger.info("[version] recorded content=%s version=%s change=%s", content_id, version_number, change_type)
        return row

    logger.error("[version] gave up recording content=%s after %s attempts", content_id, attempts)
    raise DatabaseError("Could not assign a version number, please retry")


def find_version(db: Session, content_id: str, version_number: int) -> Optional[ContentVersion]:
    return (
        db.query(ContentVersion)
        .filter(
            ContentVersion.content_id == content_id,
            ContentVersion.version_number == version_number,
        )
        .first()
    )


def get_version(db: Session, content_id: str, version_number: int) -> ContentVersion:
    row = find_version(db, content_id, version_number)
    if not row:
        raise NotFound("Version not found")
    return row


def list_versions(
    db: Session,
    content_id: str,
    *,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[ContentVersion], int]:
    q = db.query(ContentVersion).filter(ContentVersion.content_id == content_id)
    total = q.count()
    rows = q.order_by(ContentVersion.version_number.desc()).offset(offset).limit(limit).all()
    return rows, total


def compare_versions(db: Session, content_id: str, version1: int, version2: int) -> Dict[str, Any]:
    first = get_version(db, content_id, version1)
    second = get_version(db, content_id, version2)
    return {
        "content_id": content_id,
        "version1": to_response(first),
        "version2": to_response(second),
        "changed_fields": changed_fields(snapshot_of(first), snapshot_of(second)),
    }


def restore_version(db: Session, content_id: str, version_number: int, acting_user_id: str) -> ContentVersion:
    source = get_version(db, content_id, version_number)
    row = record_version(
        db,
        content_id,
        author_id=acting_user_id,
        change_type="restore",
        updates=snapshot_of(source),
    )
    logger.info(
        "[version] restored content=%s from version=%s as version=%s",
        content_id, version_number, row.version_number,
    )
    return row


def cleanup_versions(db: Session, keep_versions: Optional[int] = None) -> int:
    """Delete all but the newest ``keep_versions`` rows of every content item."""
    keep = settings.VERSION_RETENTION if keep_versions is None else keep_versions
    if keep < 1:
        raise ValidationError("keep_versions must be at least 1")

    content_ids = [
        row[0]
        for row in db.query(ContentVersion.content_id)
        .group_by(ContentVersion.content_id)
        .having(func.count(ContentVersion.version_id) > keep)
        .all()
    ]
    deleted = 0
    for content_id in content_ids:
        cutoff = (
            db.query(ContentVersion.version_number)
            .filter(ContentVersion.content_id == content_id)
            .order_by(ContentVersion.version_number.desc())
            .offset(keep - 1)
            .limit(1)
            .scalar()
        )
        if cutoff is None:
            continue
        deleted += (
            db.query(ContentVersion)
            .filter(
                ContentVersion.content_id == content_id,
                ContentVersion.version_number < cutoff,
            )
            .delete(synchronize_session=False)
        )
    db.commit()
    logger.info("[version] cleanup kept=%s deleted=%s across %s content items", keep, deleted, len(content_ids))
    return deleted


def version_stats(db: Session, content_id: str) -> Dict[str, Any]:
    total, latest, first_created, last_modified = (
        db.query(
            func.count(ContentVersion.version_id),
            func.max(ContentVersion.version_number),
            func.min(ContentVersion.created_at),
            func.max(ContentVersion.created_at),
        )
        .filter(ContentVersion.content_id == content_id)
        .one()
    )
    contributors = [
        row[0]
        for row in db.query(ContentVersion.author_id)
        .filter(ContentVersion.content_id == content_id)
        .distinct()
        .order_by(ContentVersion.author_id)
        .all()
    ]
    return {
        "content_id": content_id,
        "total_versions": int(total or 0),
        "latest_version": int(latest or 0),
        "first_created": first_created,
        "last_modified": last_modified,
        "contributors": contributors,
    }


def to_response(row: ContentVersion) -> Dict[str, Any]:
    return {
        "version_id": row.version_id,
        "content_id": row.content_id,
        "version_number": row.version_number,
        "title": row.title,
        "body": row.body,
        "excerpt": row.excerpt,
        "change_type": row.change_type,
        "author_id": row.author_id,
        "created_at": row.created_at,
    }
