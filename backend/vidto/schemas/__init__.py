from vidto.schemas.tag import TagBase, TagCreate, TagResponse
from vidto.schemas.video import (
    SortKey,
    VideoItem,
    VideoCreate,
    VideoCreated,
    VideoFilters,
)

__all__ = [
    "TagBase",
    "TagCreate",
    "TagResponse",
    "SortKey",
    "VideoItem",
    "VideoCreate",
    "VideoCreated",
    "VideoFilters",
]
