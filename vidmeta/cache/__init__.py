"""
Cache layer: Redis-backed cache service and the video list page cache.
"""
from vidmeta.cache.cache_service import (
    CacheService,
    VideoListCache,
    create_cache_client,
    get_video_cache,
)
from vidmeta.cache.memory import MemoryCacheClient

__all__ = [
    "CacheService",
    "VideoListCache",
    "MemoryCacheClient",
    "create_cache_client",
    "get_video_cache",
]
