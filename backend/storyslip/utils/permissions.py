"""Role helpers and website membership checks."""

from typing import Optional

from sqlalchemy.orm import Session

from storyslip.models.user import User
from storyslip.models.website import WebsiteMember


ADMIN = "admin"

OWNER = "owner"
SITE_ADMIN = "admin"
EDITOR = "editor"
VIEWER = "viewer"

MEMBER_ROLES = (OWNER, SITE_ADMIN, EDITOR, VIEWER)
EDIT_ROLES = (OWNER, SITE_ADMIN, EDITOR)
MANAGE_ROLES = (OWNER, SITE_ADMIN)


def is_admin(user: User) -> bool:
    return user.role == ADMIN


def get_member_role(db: Session, website_id: str, user_id: str) -> Optional[str]:
    row = (
        db.query(WebsiteMember.role)
        .filter(WebsiteMember.website_id == website_id, WebsiteMember.user_id == user_id)
        .first()
    )
    return row[0] if row else None


def can_view_website(role: Optional[str]) -> bool:
    return role in MEMBER_ROLES


def can_edit_content(role: Optional[str]) -> bool:
    return role in EDIT_ROLES


def can_manage_members(role: Optional[str]) -> bool:
    return role in MANAGE_ROLES
