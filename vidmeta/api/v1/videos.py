"""
Videos API: create, list (cached), update, delete
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidmeta.auth.dependencies import get_current_user, get_db, get_list_viewer
from vidmeta.cache.cache_service import VideoListCache, get_video_cache
from vidmeta.database.models.user import User
from vidmeta.schemas.video import (
    DeleteResponse,
    VideoCreate,
    VideoListQuery,
    VideoResponse,
    VideoUpdate,
)
from vidmeta.services.video_service import VideoService

router = APIRouter()


async def get_video_service(
    db: AsyncSession = Depends(get_db),
    cache: VideoListCache = Depends(get_video_cache),
) -> VideoService:
    return VideoService(db, cache)


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def create_video(
    body: VideoCreate,
    current_user: User = Depends(get_current_user),
    service: VideoService = Depends(get_video_service),
):
    """Создание видео (владелец: текущий пользователь)."""
    return await service.create_video(current_user.id, body)


@router.get("", response_model=List[VideoResponse], dependencies=[Depends(get_list_viewer)])
async def list_videos(
    genre: Optional[str] = Query(None, min_length=1),
    tag: Optional[str] = Query(None, min_length=1),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: VideoService = Depends(get_video_service),
):
    """Список видео с фильтрами genre/tag и пагинацией page/limit (кэш 60 с)."""
    query = VideoListQuery(genre=genre, tag=tag, page=page, limit=limit)
    return await service.list_videos(query)


@router.put("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: int,
    body: VideoUpdate,
    current_user: User = Depends(get_current_user),
    service: VideoService = Depends(get_video_service),
):
    """Частичное обновление видео владельцем."""
    return await service.update_video(video_id, current_user.id, body)


@router.delete("/{video_id}", response_model=DeleteResponse)
async def delete_video(
    video_id: int,
    current_user: User = Depends(get_current_user),
    service: VideoService = Depends(get_video_service),
):
    """Удаление видео владельцем."""
    await service.delete_video(video_id, current_user.id)
    return DeleteResponse(id=video_id)
