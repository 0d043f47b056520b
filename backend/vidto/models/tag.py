from sqlalchemy import Column, String, Table, ForeignKey, Index
from sqlalchemy.orm import relationship

from vidto.database import Base

# Many-to-many relationship between videos and tags.
# The composite primary key keeps each (video, tag) pair unique and the
# cascades remove links together with either side.
video_tags = Table(
    "video_tags",
    Base.metadata,
    Column(
        "video_id",
        String(36),
        ForeignKey("videos.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id", String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    ),
    Index("idx_video_tags_tag_id", "tag_id"),
)


class Tag(Base):
    """Tag shared across videos."""

    __tablename__ = "tags"

    id = Column(String(36), primary_key=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    color = Column(String(7), nullable=False)  # Hex color code

    # Relationships
    videos = relationship(
        "Video", secondary=video_tags, back_populates="tags", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Tag {self.name}>"
