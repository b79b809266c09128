"""
Business services
"""
from vidmeta.services.auth_service import AuthService
from vidmeta.services.video_service import VideoService

__all__ = [
    "AuthService",
    "VideoService",
]
