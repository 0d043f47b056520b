from datetime import datetime, timezone
from sqlalchemy import (
    CheckConstraint,
    Column,
    Integer,
    String,
    DateTime,
    Index,
)
from sqlalchemy.orm import relationship

from vidto.database import Base
from vidto.models.tag import video_tags


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Video(Base):
    """Catalog entry for a single video."""

    __tablename__ = "videos"

    id = Column(String(36), primary_key=True)
    title = Column(String(500), nullable=False)
    thumbnail_url = Column(String(512), nullable=False)

    # Video metadata
    duration = Column(Integer, nullable=False)  # seconds
    views = Column(Integer, nullable=False, default=0)

    # Timestamps (naive UTC)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True, onupdate=utcnow)

    # Relationships
    tags = relationship(
        "Tag",
        secondary=video_tags,
        back_populates="videos",
        order_by="Tag.name",
        passive_deletes=True,
    )

    # Sort keys are indexed for the gallery queries
    __table_args__ = (
        CheckConstraint("duration >= 1", name="ck_videos_duration_positive"),
        CheckConstraint("views >= 0", name="ck_videos_views_non_negative"),
        Index("idx_videos_created_at", "created_at"),
        Index("idx_videos_views", "views"),
    )

    def __repr__(self) -> str:
        return f"<Video {self.id} {self.title!r}>"
