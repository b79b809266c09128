"""
Тесты кэша страниц видео: ключи, TTL, инвалидация, поколения.
"""
import logging
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from vidmeta.cache.cache_service import CacheService, VideoListCache

PAGE = [{"id": 1, "title": "Clip", "tags": ["a", "b"]}]


class TestComputeKey:
    """Ключ страницы: детерминизм и отсутствие коллизий."""

    def test_format_without_filters(self):
        assert VideoListCache.compute_key(None, None, 1, 10) == "videos:all:all:1:10"

    def test_format_with_filters(self):
        assert VideoListCache.compute_key("demo", "funny", 2, 20) == "videos:demo:funny:2:20"

    def test_same_arguments_same_key(self):
        for args in [(None, None, 1, 10), ("demo", None, 3, 5), ("a b", "c/d", 1, 100)]:
            assert VideoListCache.compute_key(*args) == VideoListCache.compute_key(*args)

    def test_any_differing_argument_changes_key(self):
        base = ("demo", "funny", 1, 10)
        variants = [
            (None, "funny", 1, 10),
            ("demo", None, 1, 10),
            ("Demo", "funny", 1, 10),
            ("demo", "fun", 1, 10),
            ("demo", "funny", 2, 10),
            ("demo", "funny", 1, 11),
        ]
        base_key = VideoListCache.compute_key(*base)
        keys = {VideoListCache.compute_key(*v) for v in variants}
        assert base_key not in keys
        assert len(keys) == len(variants)

    def test_literal_all_differs_from_no_filter(self):
        assert VideoListCache.compute_key("all", None, 1, 10) != VideoListCache.compute_key(None, None, 1, 10)
        assert VideoListCache.compute_key(None, "all", 1, 10) != VideoListCache.compute_key(None, None, 1, 10)

    def test_colon_in_filter_cannot_shift_segments(self):
        left = VideoListCache.compute_key("a:b", "c", 1, 10)
        right = VideoListCache.compute_key("a", "b:c", 1, 10)
        assert left != right
        assert left.count(":") == 4

    def test_encoded_values_do_not_collide_with_raw(self):
        assert VideoListCache.compute_key("%61ll", None, 1, 10) != VideoListCache.compute_key("all", None, 1, 10)
        assert VideoListCache.compute_key("a%3Ab", None, 1, 10) != VideoListCache.compute_key("a:b", None, 1, 10)


class TestVideoListCache:
    """Read-through страницы на in-memory бэкенде с управляемыми часами."""

    async def test_miss_then_hit(self, video_cache):
        key = video_cache.compute_key(None, None, 1, 10)
        assert await video_cache.get_page(key) is None

        assert await video_cache.set_page(key, PAGE) is True
        assert await video_cache.get_page(key) == PAGE

    async def test_empty_page_is_a_hit(self, video_cache):
        key = video_cache.compute_key("nothing", None, 1, 10)
        await video_cache.set_page(key, [])
        assert await video_cache.get_page(key) == []

    async def test_entry_expires_after_ttl(self, video_cache, clock):
        key = video_cache.compute_key("demo", None, 1, 10)
        await video_cache.set_page(key, PAGE)

        clock.advance(59)
        assert await video_cache.get_page(key) == PAGE

        clock.advance(2)
        assert await video_cache.get_page(key) is None

    async def test_put_overwrites_and_resets_expiry(self, video_cache, clock):
        key = video_cache.compute_key(None, None, 1, 10)
        await video_cache.set_page(key, PAGE)
        clock.advance(50)
        await video_cache.set_page(key, [])
        clock.advance(50)
        assert await video_cache.get_page(key) == []

    async def test_invalidate_all_drops_every_page(self, video_cache, memory_client):
        keys = [
            video_cache.compute_key(None, None, 1, 10),
            video_cache.compute_key("demo", None, 2, 10),
            video_cache.compute_key(None, "a", 1, 5),
        ]
        for key in keys:
            await video_cache.set_page(key, PAGE)
        memory_client.setex("sessions:unrelated", 600, "keep")

        assert await video_cache.invalidate_all() is True

        for key in keys:
            assert await video_cache.get_page(key) is None
        assert memory_client.get("sessions:unrelated") == b"keep"

    async def test_invalidate_all_is_idempotent(self, video_cache):
        key = video_cache.compute_key(None, None, 1, 10)
        await video_cache.set_page(key, PAGE)
        assert await video_cache.invalidate_all() is True
        assert await video_cache.invalidate_all() is True
        assert await video_cache.get_page(key) is None

    async def test_invalidate_bumps_generation(self, video_cache):
        before = await video_cache.generation()
        await video_cache.invalidate_all()
        assert await video_cache.generation() == before + 1

    async def test_stale_read_is_not_stored_after_invalidation(self, video_cache):
        """Чтение, начатое до записи, не кладёт устаревшую страницу в кэш."""
        key = video_cache.compute_key(None, None, 1, 10)
        generation = await video_cache.generation()

        await video_cache.invalidate_all()  # запись произошла во время чтения

        assert await video_cache.set_page(key, PAGE, generation=generation) is False
        assert await video_cache.get_page(key) is None

    async def test_fresh_read_is_stored(self, video_cache):
        key = video_cache.compute_key(None, None, 1, 10)
        generation = await video_cache.generation()
        assert await video_cache.set_page(key, PAGE, generation=generation) is True
        assert await video_cache.get_page(key) == PAGE


class TestVideoListCacheBackendDown:
    """Недоступный Redis: промахи и логируемая неудачная инвалидация."""

    @pytest.fixture
    def down_cache(self):
        redis = MagicMock()
        error = RedisConnectionError("Connection refused")
        redis.get.side_effect = error
        redis.setex.side_effect = error
        redis.incr.side_effect = error
        redis.scan_iter.side_effect = error
        return VideoListCache(CacheService(redis), ttl=60)

    async def test_get_page_is_a_miss(self, down_cache):
        assert await down_cache.get_page("videos:all:all:1:10") is None

    async def test_set_page_fails_quietly(self, down_cache):
        assert await down_cache.set_page("videos:all:all:1:10", PAGE) is False

    async def test_invalidate_all_logs_error_and_returns_false(self, down_cache, caplog):
        with caplog.at_level(logging.ERROR, logger="vidmeta.cache.cache_service"):
            assert await down_cache.invalidate_all() is False
        assert "invalidation failed" in caplog.text
        assert "60s" in caplog.text
