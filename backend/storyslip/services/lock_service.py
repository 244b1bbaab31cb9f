"""Edit lock service.

Each content item has at most one lock row. Expiry is evaluated lazily: a
row whose ``expires_at`` has passed is treated as absent by every read and is
overwritten by the next successful ``acquire_lock``. ``purge_expired_locks``
only tidies storage; callers observe the same behavior with or without it.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storyslip.config import settings
from storyslip.models.content_lock import ContentLock
from storyslip.utils.errors import DatabaseError, LockConflict, LockNotFound, NotLockHolder, ValidationError
from storyslip.utils.helpers import utc_now

logger = logging.getLogger(__name__)


def _is_active(lock: Optional[ContentLock], now: datetime) -> bool:
    return lock is not None and lock.expires_at > now


def get_active_lock(db: Session, content_id: str, now: Optional[datetime] = None) -> Optional[ContentLock]:
    now = now or utc_now()
    lock = db.query(ContentLock).filter(ContentLock.content_id == content_id).first()
    return lock if _is_active(lock, now) else None


def acquire_lock(
    db: Session,
    *,
    website_id: str,
    content_id: str,
    user_id: str,
    ttl_minutes: Optional[int] = None,
    now: Optional[datetime] = None,
) -> ContentLock:
    now = now or utc_now()
    ttl = settings.LOCK_TTL_MINUTES if ttl_minutes is None else ttl_minutes
    if ttl < 1:
        raise ValidationError("ttl_minutes must be at least 1")
    expires_at = now + timedelta(minutes=ttl)

    lock = (
        db.query(ContentLock)
        .filter(ContentLock.content_id == content_id)
        .with_for_update()
        .first()
    )
    if _is_active(lock, now) and lock.user_id != user_id:
        logger.info("[lock] refused content=%s user=%s held_by=%s", content_id, user_id, lock.user_id)
        raise LockConflict(lock.user_id, lock.expires_at)

    if lock is None:
        lock = ContentLock(
            content_id=content_id,
            website_id=website_id,
            user_id=user_id,
            locked_at=now,
            last_activity=now,
            expires_at=expires_at,
        )
        db.add(lock)
    else:
        # Expired or foreign rows are reclaimed; the holder's own lock is refreshed.
        if not _is_active(lock, now) or lock.user_id != user_id:
            lock.locked_at = now
        lock.user_id = user_id
        lock.website_id = website_id
        lock.last_activity = now
        lock.expires_at = expires_at

    try:
        db.commit()
    except IntegrityError:
        # Another request inserted the first lock row for this content between our read and write.
        db.rollback()
        winner = get_active_lock(db, content_id, now=now)
        if winner is not None and winner.user_id != user_id:
            raise LockConflict(winner.user_id, winner.expires_at)
        raise DatabaseError("Failed to acquire lock")
    db.refresh(lock)
    logger.info("[lock] granted content=%s user=%s expires_at=%s", content_id, user_id, lock.expires_at.isoformat())
    return lock


def extend_lock(
    db: Session,
    *,
    content_id: str,
    user_id: str,
    minutes: Optional[int] = None,
    now: Optional[datetime] = None,
) -> ContentLock:
    now = now or utc_now()
    minutes = settings.LOCK_TTL_MINUTES if minutes is None else minutes
    if minutes < 1 or minutes > settings.LOCK_MAX_EXTEND_MINUTES:
        raise ValidationError(f"minutes must be between 1 and {settings.LOCK_MAX_EXTEND_MINUTES}")

    lock = get_active_lock(db, content_id, now=now)
    if lock is None:
        raise LockNotFound()
    if lock.user_id != user_id:
        raise NotLockHolder(lock.user_id, lock.expires_at)

    lock.last_activity = now
    lock.expires_at = now + timedelta(minutes=minutes)
    db.commit()
    db.refresh(lock)
    logger.info("[lock] extended content=%s user=%s expires_at=%s", content_id, user_id, lock.expires_at.isoformat())
    return lock


def release_lock(db: Session, *, content_id: str, user_id: str, now: Optional[datetime] = None) -> bool:
    """Release the caller's lock. Returns False when there was nothing to release."""
    now = now or utc_now()
    lock = db.query(ContentLock).filter(ContentLock.content_id == content_id).first()
    if lock is None:
        return False
    if not _is_active(lock, now):
        db.delete(lock)
        db.commit()
        return False
    if lock.user_id != user_id:
        raise NotLockHolder(lock.user_id, lock.expires_at)

    db.delete(lock)
    db.commit()
    logger.info("[lock] released content=%s user=%s", content_id, user_id)
    return True


def ensure_not_locked_by_other(db: Session, *, content_id: str, user_id: str, now: Optional[datetime] = None) -> None:
    lock = get_active_lock(db, content_id, now=now)
    if lock is not None and lock.user_id != user_id:
        raise LockConflict(lock.user_id, lock.expires_at)


def purge_expired_locks(db: Session, now: Optional[datetime] = None) -> int:
    now = now or utc_now()
    deleted = (
        db.query(ContentLock)
        .filter(ContentLock.expires_at <= now)
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted:
        logger.info("[lock] purged %s expired locks", deleted)
    return int(deleted or 0)


def to_response(lock: ContentLock) -> Dict[str, Any]:
    return {
        "content_id": lock.content_id,
        "website_id": lock.website_id,
        "locked_by": lock.user_id,
        "locked_at": lock.locked_at,
        "last_activity": lock.last_activity,
        "expires_at": lock.expires_at,
    }
