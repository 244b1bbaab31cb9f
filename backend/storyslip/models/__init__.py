"""SQLAlchemy model package."""

from storyslip.models.user import User
from storyslip.models.website import Website, WebsiteMember
from storyslip.models.content import Content
from storyslip.models.content_version import ContentVersion
from storyslip.models.content_lock import ContentLock

__all__ = [
    "User",
    "Website", "WebsiteMember",
    "Content",
    "ContentVersion",
    "ContentLock",
]
