"""
Users API: /me
"""
from fastapi import APIRouter, Depends

from vidmeta.api.v1.videos import get_video_service
from vidmeta.auth.dependencies import get_current_user
from vidmeta.database.models.user import User
from vidmeta.schemas.user import UserResponse, UserWithVideos
from vidmeta.services.video_service import VideoService

router = APIRouter()


@router.get("/me", response_model=UserWithVideos)
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
    service: VideoService = Depends(get_video_service),
):
    """Информация о текущем пользователе и его видео."""
    videos = await service.list_owned(current_user.id)
    return UserWithVideos(
        **UserResponse.model_validate(current_user).model_dump(),
        videos=videos,
    )
