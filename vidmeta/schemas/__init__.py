"""
Pydantic schemas for API and services
"""
from vidmeta.schemas.video import (
    VideoCreate,
    VideoUpdate,
    VideoResponse,
    VideoListQuery,
    DeleteResponse,
)
from vidmeta.schemas.user import (
    UserRegister,
    UserLogin,
    Token,
    UserResponse,
    UserWithVideos,
)

__all__ = [
    "VideoCreate",
    "VideoUpdate",
    "VideoResponse",
    "VideoListQuery",
    "DeleteResponse",
    "UserRegister",
    "UserLogin",
    "Token",
    "UserResponse",
    "UserWithVideos",
]
