"""Websites API router: websites and their team members."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storyslip.database import get_db
from storyslip.middleware.auth_middleware import get_current_user
from storyslip.models.user import User
from storyslip.schemas.website import MemberCreate, MemberOut, WebsiteCreate, WebsiteOut
from storyslip.services import website_service

router = APIRouter(prefix="/api/websites", tags=["websites"])


def _website_out(website, role: str) -> WebsiteOut:
    return WebsiteOut(
        website_id=website.website_id,
        name=website.name,
        domain=website.domain,
        owner_id=website.owner_id,
        created_at=website.created_at,
        role=role,
    )


@router.post("", response_model=WebsiteOut)
def create_website(data: WebsiteCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    website = website_service.create_website(db, data, current_user)
    return _website_out(website, "owner")


@router.get("", response_model=List[WebsiteOut])
def list_websites(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return [_website_out(website, role) for website, role in website_service.list_user_websites(db, current_user)]


@router.get("/{website_id}", response_model=WebsiteOut)
def get_website(website_id: UUID, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    website, role = website_service.get_website_for_member(db, str(website_id), current_user)
    return _website_out(website, role)


@router.get("/{website_id}/members", response_model=List[MemberOut])
def list_members(website_id: UUID, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return website_service.list_members(db, str(website_id), current_user)


@router.post("/{website_id}/members", response_model=MemberOut)
def add_member(
    website_id: UUID,
    data: MemberCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return website_service.add_member(db, str(website_id), data, current_user)
