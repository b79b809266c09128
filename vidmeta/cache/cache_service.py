"""
Redis-backed cache service and the read-through cache for video list pages.
"""
import asyncio
import json
import logging
from functools import lru_cache
from typing import Any, List, Optional
from urllib.parse import quote

from redis import Redis

from vidmeta.cache.memory import MemoryCacheClient
from vidmeta.config import get_settings
from vidmeta.monitoring.metrics import (
    track_cache_error,
    track_cache_hit,
    track_cache_invalidation,
    track_cache_miss,
)

logger = logging.getLogger(__name__)
_settings = get_settings()


def create_cache_client() -> Any:
    """Клиент кэша по настройке CACHE_BACKEND (redis или memory)."""
    if _settings.CACHE_BACKEND == "memory":
        logger.info("Using in-memory cache backend")
        return MemoryCacheClient()
    return Redis.from_url(
        _settings.REDIS_URL,
        socket_timeout=_settings.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=_settings.REDIS_SOCKET_TIMEOUT,
    )


class CacheService:
    """
    Сервис кэширования на Redis (sync Redis, вызовы в executor).

    Every method swallows backend errors: reads degrade to a miss and writes
    report failure through their return value.
    """

    def __init__(self, client: Any = None) -> None:
        self._redis = client if client is not None else create_cache_client()
        self.default_ttl = 3600  # 1 hour

    def _run(self, fn: Any, *args: Any, **kwargs: Any) -> Any:
        return asyncio.get_running_loop().run_in_executor(
            None, lambda: fn(*args, **kwargs)
        )

    async def get(self, key: str) -> Optional[Any]:
        """Получение значения из кэша."""
        try:
            value = await self._run(self._redis.get, key)
            if value:
                return json.loads(value)
            return None
        except Exception as e:
            logger.warning("Cache get error key=%s: %s", key, e)
            track_cache_error("get")
            return None

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None,
    ) -> bool:
        """Установка значения в кэш."""
        try:
            ttl = ttl or self.default_ttl
            serialized = json.dumps(value)
            await self._run(self._redis.setex, key, ttl, serialized)
            return True
        except Exception as e:
            logger.warning("Cache set error key=%s: %s", key, e)
            track_cache_error("set")
            return False

    async def delete_pattern(self, pattern: str) -> Optional[int]:
        """Удаление всех ключей по glob-шаблону; None при ошибке."""
        try:
            return await self._run(self._delete_matching, pattern)
        except Exception as e:
            logger.warning("Cache delete_pattern error pattern=%s: %s", pattern, e)
            track_cache_error("delete_pattern")
            return None

    def _delete_matching(self, pattern: str, batch_size: int = 500) -> int:
        deleted = 0
        batch: List[Any] = []
        for key in self._redis.scan_iter(match=pattern, count=batch_size):
            batch.append(key)
            if len(batch) >= batch_size:
                deleted += self._redis.delete(*batch)
                batch = []
        if batch:
            deleted += self._redis.delete(*batch)
        return deleted

    async def incr(self, key: str) -> Optional[int]:
        """Атомарный инкремент счётчика; None при ошибке."""
        try:
            return int(await self._run(self._redis.incr, key))
        except Exception as e:
            logger.warning("Cache incr error key=%s: %s", key, e)
            track_cache_error("incr")
            return None

    async def ping(self) -> bool:
        """Доступность бэкенда кэша."""
        try:
            return bool(await self._run(self._redis.ping))
        except Exception as e:
            logger.warning("Cache ping error: %s", e)
            return False


class VideoListCache:
    """
    Кэш страниц GET /videos (read-through, грубая инвалидация).

    Keys look like ``videos:<genre|all>:<tag|all>:<page>:<limit>``. Any write
    to the video collection drops every ``videos:*`` entry. A generation
    counter, bumped before the drop, lets a read that started before the
    write skip storing its now outdated result.
    """

    PREFIX = "videos"
    NO_FILTER = "all"
    GENERATION_KEY = "meta:videos:generation"

    def __init__(self, cache_service: CacheService, ttl: Optional[int] = None) -> None:
        self.cache = cache_service
        self.ttl = ttl or _settings.VIDEOS_CACHE_TTL  # 60 seconds

    @classmethod
    def _segment(cls, value: Optional[str]) -> str:
        if value is None:
            return cls.NO_FILTER
        encoded = quote(value, safe="")
        # quote() never emits %61, so this cannot collide with another value
        if encoded == cls.NO_FILTER:
            return "%61ll"
        return encoded

    @classmethod
    def compute_key(
        cls,
        genre: Optional[str],
        tag: Optional[str],
        page: int,
        limit: int,
    ) -> str:
        """Детерминированный ключ страницы списка видео."""
        return ":".join(
            [cls.PREFIX, cls._segment(genre), cls._segment(tag), str(int(page)), str(int(limit))]
        )

    async def generation(self) -> Optional[int]:
        """Текущее поколение кэша (0, если счётчик ещё не создан)."""
        value = await self.cache.get(self.GENERATION_KEY)
        return int(value) if value is not None else 0

    async def get_page(self, key: str) -> Optional[List[dict]]:
        """Страница из кэша или None (промах/истёк/недоступен)."""
        value = await self.cache.get(key)
        if isinstance(value, list):
            logger.debug("Video cache hit", extra={"cache_key": key})
            track_cache_hit()
            return value
        logger.debug("Video cache miss", extra={"cache_key": key})
        track_cache_miss()
        return None

    async def set_page(
        self,
        key: str,
        videos: List[dict],
        generation: Optional[int] = None,
    ) -> bool:
        """
        Сохранение страницы с TTL.

        If ``generation`` is given and an invalidation happened since it was
        read, the page is not stored.
        """
        if generation is not None:
            current = await self.generation()
            if current != generation:
                logger.info(
                    "Skipping cache put for %s: generation %s -> %s",
                    key, generation, current, extra={"cache_key": key},
                )
                return False
        return await self.cache.set(key, videos, self.ttl)

    async def invalidate_all(self) -> bool:
        """
        Инвалидация всех страниц списка видео.

        Never raises. On failure the write still succeeds and entries may be
        served stale until their TTL runs out.
        """
        bumped = await self.cache.incr(self.GENERATION_KEY)
        deleted = await self.cache.delete_pattern(f"{self.PREFIX}:*")
        if bumped is None or deleted is None:
            logger.error(
                "Video cache invalidation failed; cached pages may be stale for up to %ss",
                self.ttl,
            )
            track_cache_invalidation("failed")
            return False
        logger.info("Video cache invalidated: %s entries removed, generation %s", deleted, bumped)
        track_cache_invalidation("ok")
        return True


@lru_cache()
def get_video_cache() -> VideoListCache:
    """Общий кэш страниц видео (создаётся один раз на процесс)."""
    return VideoListCache(CacheService())
