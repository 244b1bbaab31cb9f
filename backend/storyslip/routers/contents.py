"""Content API router. Saves are checked for lock and version conflicts before they are recorded."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storyslip.database import get_db
from storyslip.middleware.auth_middleware import get_current_user
from storyslip.models.user import User
from storyslip.schemas.content import ContentCreate, ContentOut, ContentUpdate
from storyslip.services import content_service

router = APIRouter(prefix="/api/websites/{website_id}/content", tags=["content"])


@router.post("", response_model=ContentOut)
def create_content(
    website_id: UUID,
    data: ContentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return content_service.create_content(db, str(website_id), data, current_user)


@router.get("", response_model=List[ContentOut])
def list_contents(
    website_id: UUID,
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return content_service.list_contents(db, str(website_id), current_user, status=status)


@router.get("/{content_id}", response_model=ContentOut)
def get_content(
    website_id: UUID,
    content_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    content, _ = content_service.get_content_for_member(db, str(website_id), str(content_id), current_user)
    return content


@router.put("/{content_id}", response_model=ContentOut)
def update_content(
    website_id: UUID,
    content_id: UUID,
    data: ContentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return content_service.update_content(db, str(website_id), str(content_id), data, current_user)
