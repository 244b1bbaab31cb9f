"""Pydantic schemas for users and authentication."""

from pydantic import BaseModel
from datetime import datetime


class UserOut(BaseModel):
    user_id: str
    email: str
    name: str
    role: str
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    email: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
