"""
Database package
"""
from vidmeta.database.connection import engine, async_session_maker, get_db, init_db, close_db
from vidmeta.database.models import (
    BaseModel,
    User,
    Video,
    VideoTag,
)
from vidmeta.database.repositories import (
    BaseRepository,
    UserRepository,
    VideoRepository,
)

__all__ = [
    # Connection
    "engine",
    "async_session_maker",
    "get_db",
    "init_db",
    "close_db",
    # Models
    "BaseModel",
    "User",
    "Video",
    "VideoTag",
    # Repositories
    "BaseRepository",
    "UserRepository",
    "VideoRepository",
]
