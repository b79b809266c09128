"""
Video service: read-through listing and store-then-invalidate writes
"""
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from vidmeta.cache.cache_service import VideoListCache
from vidmeta.database.models.video import Video
from vidmeta.database.repositories.video_repository import VideoRepository
from vidmeta.exceptions import NotFoundOrForbidden
from vidmeta.schemas.video import VideoCreate, VideoListQuery, VideoResponse, VideoUpdate

logger = logging.getLogger(__name__)


class VideoService:
    """
    Сервис видео: БД + кэш страниц списка.

    Writes commit to the database first and only then invalidate the list
    cache; a failed write never touches the cache. Cache failures never
    fail a request.
    """

    def __init__(self, session: AsyncSession, cache: VideoListCache):
        self._session = session
        self._repo = VideoRepository(session)
        self._cache = cache

    @staticmethod
    def to_response(video: Video) -> VideoResponse:
        return VideoResponse.model_validate(video)

    async def create_video(self, owner_id: int, data: VideoCreate) -> VideoResponse:
        """Создание видео: БД -> commit -> инвалидация кэша."""
        video = await self._repo.create(
            user_id=owner_id,
            title=data.title,
            description=data.description,
            duration=data.duration,
            genre=data.genre,
            tags=data.tags,
        )
        await self._session.commit()
        response = self.to_response(video)
        logger.info("Video created", extra={"user_id": owner_id, "video_id": video.id})
        await self._cache.invalidate_all()
        return response

    async def list_videos(self, query: VideoListQuery) -> List[VideoResponse]:
        """
        Список видео через кэш.

        Hit: cached page. Miss: query the database and store the page for
        the cache TTL unless an invalidation happened meanwhile.
        """
        key = self._cache.compute_key(query.genre, query.tag, query.page, query.limit)
        cached = await self._cache.get_page(key)
        if cached is not None:
            return [VideoResponse.model_validate(item) for item in cached]

        generation = await self._cache.generation()
        videos = await self._repo.list_by_filter(
            genre=query.genre,
            tag=query.tag,
            offset=query.offset,
            limit=query.limit,
        )
        responses = [self.to_response(video) for video in videos]
        await self._cache.set_page(
            key,
            [response.model_dump(mode="json") for response in responses],
            generation=generation,
        )
        return responses

    async def list_owned(self, owner_id: int) -> List[VideoResponse]:
        """Все видео пользователя (без кэша)."""
        videos = await self._repo.list_by_owner(owner_id)
        return [self.to_response(video) for video in videos]

    async def update_video(
        self,
        video_id: int,
        owner_id: int,
        data: VideoUpdate,
    ) -> VideoResponse:
        """
        Обновление видео владельцем.

        Raises:
            NotFoundOrForbidden: видео нет или оно чужое
        """
        video = await self._repo.update_owned(video_id, owner_id, data.to_patch())
        if video is None:
            logger.info(
                "Update rejected: video %s not found or not owned", video_id,
                extra={"user_id": owner_id},
            )
            raise NotFoundOrForbidden()
        await self._session.commit()
        response = self.to_response(video)
        logger.info("Video updated", extra={"user_id": owner_id, "video_id": video_id})
        await self._cache.invalidate_all()
        return response

    async def delete_video(self, video_id: int, owner_id: int) -> None:
        """
        Удаление видео владельцем.

        Raises:
            NotFoundOrForbidden: видео нет или оно чужое
        """
        deleted = await self._repo.delete_owned(video_id, owner_id)
        if not deleted:
            logger.info(
                "Delete rejected: video %s not found or not owned", video_id,
                extra={"user_id": owner_id},
            )
            raise NotFoundOrForbidden()
        await self._session.commit()
        logger.info("Video deleted", extra={"user_id": owner_id, "video_id": video_id})
        await self._cache.invalidate_all()
