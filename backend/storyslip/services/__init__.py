"""Service layer package."""

from storyslip.services import (
    auth_service,
    website_service,
    content_service,
    version_service,
    lock_service,
    conflict_service,
)
