"""
Database repositories
"""
from vidmeta.database.repositories.base import BaseRepository
from vidmeta.database.repositories.user_repository import UserRepository
from vidmeta.database.repositories.video_repository import VideoRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "VideoRepository",
]
