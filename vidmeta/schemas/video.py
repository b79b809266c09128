"""
Video Pydantic schemas for API request/response
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def normalize_tags(value: Any) -> Any:
    """
    Теги: список строк или строка через запятую ("a,b").

    Values are stripped, empty ones dropped, duplicates removed (first wins).
    """
    if value is None:
        return value
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple, set)):
        return value
    tags = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError("Tags must be strings")
        tag = item.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


class VideoCreate(BaseModel):
    """Тело запроса создания видео."""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    duration: int = Field(..., gt=0, description="Duration in seconds")
    genre: str = Field(..., min_length=1, max_length=100)
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        return normalize_tags(v) if v is not None else []

    @field_validator("tags")
    @classmethod
    def check_tag_length(cls, v: List[str]) -> List[str]:
        for tag in v:
            if len(tag) > 100:
                raise ValueError("Tag must be at most 100 characters")
        return v


class VideoUpdate(BaseModel):
    """Частичное обновление видео: передаются только изменяемые поля."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0)
    genre: Optional[str] = Field(None, min_length=1, max_length=100)
    tags: Optional[List[str]] = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        return normalize_tags(v)

    @model_validator(mode="after")
    def check_required_not_null(self) -> "VideoUpdate":
        for name in ("title", "duration", "genre"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_patch(self) -> dict:
        """Только явно переданные поля."""
        return self.model_dump(exclude_unset=True)


class VideoResponse(BaseModel):
    """Видео в ответах API и в кэше."""

    id: int
    title: str
    description: Optional[str] = None
    duration: int
    genre: str
    tags: List[str]
    user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VideoListQuery(BaseModel):
    """Параметры GET /videos."""

    genre: Optional[str] = None
    tag: Optional[str] = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class DeleteResponse(BaseModel):
    """Подтверждение удаления."""

    message: str = "Video deleted"
    id: int
