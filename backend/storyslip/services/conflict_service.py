"""Conflict detection for proposed content edits.

Detection only classifies and reports. Resolution (keep mine, keep theirs,
manual merge) happens on the client, which then sends a plain save or a
restore request. The save path repeats the same checks under the content
row lock in ``version_service.record_version``.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from storyslip.models.content import Content
from storyslip.services import lock_service, version_service

logger = logging.getLogger(__name__)

CLEAN = "clean"
LOCK_CONFLICT = "lock_conflict"
VERSION_CONFLICT = version_service.VERSION_CONFLICT


def detect_conflicts(
    db: Session,
    content: Content,
    *,
    user_id: str,
    proposed: Dict[str, Any],
    base_version: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    content_id = content.content_id
    latest = version_service.latest_version_number(db, content_id) or int(content.version_number or 0)
    version_service.check_base_version(base_version, latest)

    if base_version is not None and base_version < latest:
        logger.info(
            "[content-sync] version conflict content=%s user=%s base=%s latest=%s",
            content_id, user_id, base_version, latest,
        )
        return version_service.stale_base_report(
            db, content, base_version=base_version, latest=latest, proposed=proposed,
        )

    result: Dict[str, Any] = {
        "status": CLEAN,
        "has_conflicts": False,
        "latest_version": latest,
        "base_version": base_version,
        "conflicts": [],
        "base_snapshot": None,
        "current_version": None,
        "lock": None,
    }
    lock = lock_service.get_active_lock(db, content_id, now=now)
    if lock is not None:
        result["lock"] = lock_service.to_response(lock)
        if lock.user_id != user_id:
            result["status"] = LOCK_CONFLICT
            result["has_conflicts"] = True
            logger.info(
                "[content-sync] lock conflict content=%s user=%s held_by=%s",
                content_id, user_id, lock.user_id,
            )
    return result

