"""
Database models
"""
from vidmeta.database.models.base import BaseModel
from vidmeta.database.models.user import User
from vidmeta.database.models.video import Video, VideoTag

__all__ = [
    "BaseModel",
    "User",
    "Video",
    "VideoTag",
]
