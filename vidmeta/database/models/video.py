"""
Video metadata model
"""
from typing import List, Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidmeta.database.models.base import BaseModel


class Video(BaseModel):
    """
    Video metadata owned by exactly one user

    Attributes:
        id: Primary key
        user_id: Foreign key to users table (owner)
        title: Video title
        description: Optional description
        duration: Duration in seconds (positive)
        genre: Genre name
        tag_links: One VideoTag row per tag
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "videos"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True
    )
    duration: Mapped[int] = mapped_column(
        Integer,
        nullable=False
    )
    genre: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="videos"
    )
    tag_links: Mapped[List["VideoTag"]] = relationship(
        "VideoTag",
        back_populates="video",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="VideoTag.tag",
    )

    # Indexes
    __table_args__ = (
        Index("ix_videos_genre", "genre"),
        Index("ix_videos_created_at_id", "created_at", "id"),
    )

    @property
    def tags(self) -> List[str]:
        return [link.tag for link in self.tag_links]

    def set_tags(self, tags: List[str]) -> None:
        """
        Replace the tag set, keeping rows for tags that stay.

        Rows are diffed instead of rebuilt: re-adding a tag in the same flush
        would insert before the orphan delete and hit the unique constraint.
        """
        wanted = list(dict.fromkeys(tags))
        for link in list(self.tag_links):
            if link.tag not in wanted:
                self.tag_links.remove(link)
        present = {link.tag for link in self.tag_links}
        for tag in wanted:
            if tag not in present:
                self.tag_links.append(VideoTag(tag=tag))

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, user_id={self.user_id}, title='{self.title}')>"


class VideoTag(BaseModel):
    """Tag attached to a video (one row per video/tag pair)"""

    __tablename__ = "video_tags"

    video_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("videos.id", ondelete="CASCADE"),
        nullable=False
    )
    tag: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    video: Mapped["Video"] = relationship(
        "Video",
        back_populates="tag_links"
    )

    __table_args__ = (
        UniqueConstraint("video_id", "tag", name="uq_video_tags_video_id_tag"),
        Index("ix_video_tags_tag", "tag"),
    )

    def __repr__(self) -> str:
        return f"<VideoTag(video_id={self.video_id}, tag='{self.tag}')>"
