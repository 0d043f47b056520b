from vidto.client.api_client import CatalogClient
from vidto.client.feed import VideoFeed
from vidto.client.query_cache import QueryCache
from vidto.client.state import GalleryQuery, GalleryState

__all__ = [
    "CatalogClient",
    "VideoFeed",
    "QueryCache",
    "GalleryQuery",
    "GalleryState",
]
