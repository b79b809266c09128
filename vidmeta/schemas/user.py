"""
Схемы для пользовательских endpoints: /auth/*, /users/me.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from vidmeta.schemas.video import VideoResponse


class UserRegister(BaseModel):
    """User registration request"""
    email: EmailStr = Field(..., description="User email")
    password: str = Field(..., min_length=6, max_length=128, description="Password")
    name: Optional[str] = Field(None, max_length=100, description="Display name")


class UserLogin(BaseModel):
    """User login request"""
    email: EmailStr = Field(..., description="Email")
    password: str = Field(..., min_length=1, description="Password")


class Token(BaseModel):
    """Token response model"""
    token: str
    token_type: str = "bearer"
    expires_in: int  # in seconds


class UserResponse(BaseModel):
    """Профиль пользователя (без пароля)."""
    id: int
    email: str
    name: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserWithVideos(UserResponse):
    """Профиль текущего пользователя вместе с его видео."""
    videos: List[VideoResponse] = []
