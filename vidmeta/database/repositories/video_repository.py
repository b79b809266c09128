"""
Video repository: owner-scoped mutations and filtered, paginated listing
"""
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from vidmeta.database.models.base import utcnow
from vidmeta.database.models.video import Video, VideoTag
from vidmeta.database.repositories.base import BaseRepository

UPDATABLE_FIELDS = ("title", "description", "duration", "genre")


class VideoRepository(BaseRepository[Video]):
    """
    Repository for Video model operations

    Update and delete are scoped to the owner: a row that is missing and a
    row owned by someone else both come back as None/False.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(Video, session)

    async def create(
        self,
        user_id: int,
        title: str,
        duration: int,
        genre: str,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Video:
        """
        Create a new video owned by user_id

        Args:
            user_id: Owner ID
            title: Video title
            duration: Duration in seconds
            genre: Genre
            description: Optional description
            tags: Tag names (duplicates are dropped)

        Returns:
            Created video with tags loaded
        """
        video = Video(
            user_id=user_id,
            title=title,
            description=description,
            duration=duration,
            genre=genre,
        )
        video.set_tags(tags or [])
        self.session.add(video)
        await self.session.flush()
        return await self._reload(video.id)

    async def get_owned(self, video_id: int, owner_id: int) -> Optional[Video]:
        """Video by ID only if it belongs to owner_id"""
        stmt = select(Video).where(Video.id == video_id, Video.user_id == owner_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_filter(
        self,
        genre: Optional[str] = None,
        tag: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Video]:
        """
        List videos matching optional genre and tag filters

        Ordered by creation time then ID, so a given offset/limit always
        returns the same slice while the table is unchanged.

        Args:
            genre: Exact genre match (None = any)
            tag: Video must carry this tag (None = any)
            offset: Number of videos to skip
            limit: Maximum number of videos to return

        Returns:
            List of video instances
        """
        stmt = select(Video)

        if genre is not None:
            stmt = stmt.where(Video.genre == genre)
        if tag is not None:
            stmt = stmt.where(Video.tag_links.any(VideoTag.tag == tag))

        stmt = stmt.order_by(Video.created_at.asc(), Video.id.asc())
        stmt = stmt.offset(offset).limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_owner(self, owner_id: int) -> List[Video]:
        """All videos of one user, oldest first"""
        stmt = (
            select(Video)
            .where(Video.user_id == owner_id)
            .order_by(Video.created_at.asc(), Video.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update_owned(
        self,
        video_id: int,
        owner_id: int,
        patch: Dict[str, Any],
    ) -> Optional[Video]:
        """
        Apply a partial update if the video exists and belongs to owner_id

        Args:
            video_id: Video ID
            owner_id: ID of the user attempting the update
            patch: Fields to change; "tags" replaces the whole tag set

        Returns:
            Updated video or None when not found / not owned
        """
        video = await self.get_owned(video_id, owner_id)
        if video is None:
            return None

        for key, value in patch.items():
            if key in UPDATABLE_FIELDS:
                setattr(video, key, value)
        if "tags" in patch:
            video.set_tags(patch["tags"] or [])
        video.updated_at = utcnow()

        await self.session.flush()
        return await self._reload(video.id)

    async def delete_owned(self, video_id: int, owner_id: int) -> bool:
        """
        Delete a video if it exists and belongs to owner_id

        Returns:
            True if deleted, False when not found / not owned
        """
        video = await self.get_owned(video_id, owner_id)
        if video is None:
            return False
        return await self.delete(video)

    async def _reload(self, video_id: int) -> Video:
        stmt = (
            select(Video)
            .where(Video.id == video_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
