from vidto.services.tag_service import TagService
from vidto.services.video_service import VideoService

__all__ = ["TagService", "VideoService"]
