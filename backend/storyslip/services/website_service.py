"""Website service: websites, memberships and the membership gate used by every content route."""

import logging
from typing import List, Tuple

from fastapi import HTTPException
from sqlalchemy.orm import Session

from storyslip.models.user import User
from storyslip.models.website import Website, WebsiteMember
from storyslip.schemas.website import MemberCreate, WebsiteCreate
from storyslip.utils.permissions import OWNER, can_manage_members, get_member_role

logger = logging.getLogger(__name__)


def create_website(db: Session, data: WebsiteCreate, current_user: User) -> Website:
    website = Website(name=data.name, domain=data.domain, owner_id=current_user.user_id)
    db.add(website)
    db.flush()
    db.add(WebsiteMember(website_id=website.website_id, user_id=current_user.user_id, role=OWNER))
    db.commit()
    db.refresh(website)
    logger.info("[website] created website=%s owner=%s", website.website_id, current_user.user_id)
    return website


def list_user_websites(db: Session, current_user: User) -> List[Tuple[Website, str]]:
    return (
        db.query(Website, WebsiteMember.role)
        .join(WebsiteMember, WebsiteMember.website_id == Website.website_id)
        .filter(WebsiteMember.user_id == current_user.user_id)
        .order_by(Website.created_at.desc())
        .all()
    )


def get_website_for_member(db: Session, website_id: str, current_user: User) -> Tuple[Website, str]:
    role = get_member_role(db, website_id, current_user.user_id)
    website = db.query(Website).filter(Website.website_id == website_id).first() if role else None
    if not website:
        raise HTTPException(status_code=404, detail="Website not found")
    return website, role


def add_member(db: Session, website_id: str, data: MemberCreate, current_user: User) -> WebsiteMember:
    _, role = get_website_for_member(db, website_id, current_user)
    if not can_manage_members(role):
        raise HTTPException(status_code=403, detail="Insufficient permissions to manage members")

    user = db.query(User).filter(User.email == data.email.strip().lower(), User.is_active == True).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    member = (
        db.query(WebsiteMember)
        .filter(WebsiteMember.website_id == website_id, WebsiteMember.user_id == user.user_id)
        .first()
    )
    if member and member.role == OWNER:
        raise HTTPException(status_code=400, detail="The owner's role cannot be changed")
    if member:
        member.role = data.role
    else:
        member = WebsiteMember(website_id=website_id, user_id=user.user_id, role=data.role)
        db.add(member)
    db.commit()
    db.refresh(member)
    logger.info("[website] member website=%s user=%s role=%s", website_id, user.user_id, member.role)
    return member


def list_members(db: Session, website_id: str, current_user: User) -> List[WebsiteMember]:
    get_website_for_member(db, website_id, current_user)
    return (
        db.query(WebsiteMember)
        .filter(WebsiteMember.website_id == website_id)
        .order_by(WebsiteMember.member_id.asc())
        .all()
    )
