"""Content service. Saves go through version_service.record_version, which checks locks and base versions."""

import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy.orm import Session

from storyslip.models.content import Content
from storyslip.models.content_version import ContentVersion
from storyslip.models.user import User
from storyslip.schemas.content import ContentCreate, ContentUpdate
from storyslip.services import version_service
from storyslip.utils.permissions import can_edit_content, can_view_website, get_member_role

logger = logging.getLogger(__name__)


def get_content_for_member(db: Session, website_id: str, content_id: str, current_user: User) -> Tuple[Content, str]:
    # Non-members get the same 404 as a missing row.
    role = get_member_role(db, website_id, current_user.user_id)
    content = None
    if can_view_website(role):
        content = (
            db.query(Content)
            .filter(Content.content_id == content_id, Content.website_id == website_id)
            .first()
        )
    if not content:
        raise HTTPException(status_code=404, detail="Content not found")
    return content, role


def ensure_can_edit(role: Optional[str]) -> None:
    if not can_edit_content(role):
        raise HTTPException(status_code=403, detail="Insufficient permissions to edit content")


def create_content(db: Session, website_id: str, data: ContentCreate, current_user: User) -> Content:
    role = get_member_role(db, website_id, current_user.user_id)
    if not can_view_website(role):
        raise HTTPException(status_code=404, detail="Website not found")
    ensure_can_edit(role)

    content = Content(
        website_id=website_id,
        title=data.title,
        body=data.body,
        excerpt=data.excerpt,
        status=data.status,
        version_number=1,
        author_id=current_user.user_id,
    )
    db.add(content)
    db.flush()
    db.add(ContentVersion(
        content_id=content.content_id,
        version_number=1,
        title=content.title,
        body=content.body,
        excerpt=content.excerpt,
        change_type="create",
        author_id=current_user.user_id,
    ))
    db.commit()
    db.refresh(content)
    logger.info("[content] created content=%s website=%s", content.content_id, website_id)
    return content


def list_contents(db: Session, website_id: str, current_user: User, status: Optional[str] = None) -> List[Content]:
    role = get_member_role(db, website_id, current_user.user_id)
    if not can_view_website(role):
        raise HTTPException(status_code=404, detail="Website not found")
    q = db.query(Content).filter(Content.website_id == website_id)
    if status:
        q = q.filter(Content.status == status)
    return q.order_by(Content.created_at.desc()).all()


def update_content(db: Session, website_id: str, content_id: str, data: ContentUpdate, current_user: User) -> Content:
    content, role = get_content_for_member(db, website_id, content_id, current_user)
    ensure_can_edit(role)

    updates = data.model_dump(exclude_none=True, exclude={"base_version"})
    version_service.record_version(
        db,
        content_id,
        author_id=current_user.user_id,
        change_type="update",
        updates=updates,
        base_version=data.base_version,
    )
    db.refresh(content)
    return content
