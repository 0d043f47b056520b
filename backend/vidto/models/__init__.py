from vidto.models.tag import Tag, video_tags
from vidto.models.video import Video

__all__ = [
    "Video",
    "Tag",
    "video_tags",
]
