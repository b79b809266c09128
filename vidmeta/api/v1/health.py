"""
Health check endpoints
"""
from fastapi import APIRouter, Depends

from vidmeta.cache.cache_service import VideoListCache, get_video_cache
from vidmeta.config import settings

router = APIRouter()


@router.get("")
async def health_check(cache: VideoListCache = Depends(get_video_cache)):
    """Проверка здоровья приложения"""
    cache_ok = await cache.cache.ping()
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        # недоступный кэш не делает сервис нездоровым
        "cache": "ok" if cache_ok else "degraded",
    }
