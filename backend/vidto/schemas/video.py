from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from vidto.schemas.tag import TagResponse


class SortKey(str, Enum):
    """Gallery sort orders."""

    NEWEST = "newest"
    OLDEST = "oldest"
    MOST_VIEWS = "most_views"
    LEAST_VIEWS = "least_views"


class CamelModel(BaseModel):
    """Serialises with camelCase keys, accepts both spellings on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VideoItem(CamelModel):
    """Flattened video with its tags embedded."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    thumbnail_url: str
    duration: int
    views: int
    created_at: datetime
    tags: list[TagResponse] = []

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()


class VideoCreate(CamelModel):
    """Schema for creating a video."""

    title: str = Field(min_length=1, max_length=500)
    duration: int = Field(ge=1, description="Length in seconds")
    views: int = Field(ge=0)
    tag_ids: list[str] | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        return value


class VideoCreated(CamelModel):
    """Response for a created video."""

    id: str


class VideoFilters(CamelModel):
    """Tag and date-range filters applied to the gallery."""

    tag_ids: list[str] = []
    date_from: date | None = None
    date_to: date | None = None
