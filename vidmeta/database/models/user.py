"""
User model
"""
from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidmeta.database.models.base import BaseModel


class User(BaseModel):
    """
    User model for authentication and video ownership

    Attributes:
        id: Primary key
        email: Unique email address
        hashed_password: BCrypt hashed password
        name: Optional display name
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )
    name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True
    )

    # Relationships
    videos: Mapped[list["Video"]] = relationship(
        "Video",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
