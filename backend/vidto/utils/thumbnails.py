"""Deterministic thumbnail URLs served by the external image host."""

from vidto.config import Settings, settings as default_settings


def thumbnail_url_for(video_number: int, config: Settings | None = None) -> str:
    """
    Build the seed URL for the n-th video in the catalog.

    Args:
        video_number: 1-based position of the video (current count + 1)
        config: Settings override

    Returns:
        Thumbnail URL on the image host
    """
    config = config or default_settings
    base = config.thumbnail_base_url.rstrip("/")
    return f"{base}/video{video_number}/{config.thumbnail_width}/{config.thumbnail_height}"
