"""Auth API router: login, logout and the current-user lookup."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from storyslip.database import get_db
from storyslip.schemas.user import LoginRequest, TokenResponse, UserOut
from storyslip.services.auth_service import create_access_token, mock_sso_login
from storyslip.middleware.auth_middleware import get_current_user
from storyslip.models.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = mock_sso_login(db, request.email)
    token = create_access_token(user.user_id)
    return TokenResponse(access_token=token, user=UserOut.model_validate(user))


@router.post("/logout")
def logout(current_user: User = Depends(get_current_user)):
    return {"message": "Logged out"}


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
