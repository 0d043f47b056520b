"""Video feed: keeps the rendered list in step with the gallery state."""

from datetime import date
from typing import Iterable

from vidto.client.api_client import CatalogClient
from vidto.client.query_cache import QueryCache
from vidto.client.state import GalleryQuery, GalleryState
from vidto.config import Settings, settings as default_settings
from vidto.errors import CatalogError
from vidto.logger import client_logger
from vidto.schemas.video import SortKey, VideoFilters, VideoItem
from vidto.utils.thumbnails import thumbnail_url_for


class VideoFeed:
    """
    Binds gallery state, the query cache and the API client.

    Every fetch is numbered. When a newer fetch has been issued before an
    older one returns, the older result is cached under its own key but
    never replaces what is shown.
    """

    def __init__(
        self,
        client: CatalogClient,
        state: GalleryState | None = None,
        cache: QueryCache | None = None,
        config: Settings | None = None,
    ):
        self.config = config or default_settings
        self.client = client
        self.state = state or GalleryState(self.config)
        self.cache = cache or QueryCache.from_settings(self.config)
        self.videos: list[VideoItem] = []
        self.shown_query: GalleryQuery | None = None
        self.is_loading = False
        self.error: CatalogError | None = None
        self._generation = 0

    @property
    def has_more(self) -> bool:
        """False once a page came back shorter than its limit or the limit is capped."""
        if self.shown_query is None:
            return True
        if self.shown_query.limit >= self.state.max_limit:
            return False
        return len(self.videos) >= self.shown_query.limit

    @property
    def is_loading_more(self) -> bool:
        return self.is_loading and self.state.past_first_page

    def _show(self, query: GalleryQuery, videos: list[VideoItem]) -> None:
        self.videos = videos
        self.shown_query = query

    async def refresh(self, force: bool = False) -> list[VideoItem]:
        """
        Load the list for the current state.

        A fresh cached result is shown without a request. A stale one is
        shown immediately and then replaced by the refetched list.
        """
        query = self.state.query
        key = query.cache_key()
        self._generation += 1
        generation = self._generation

        entry = None if force else self.cache.get(key)
        if entry is not None:
            self._show(query, [VideoItem.model_validate(item) for item in entry.data])
            if self.cache.is_fresh(entry):
                self.is_loading = False
                return self.videos

        self.is_loading = True
        try:
            videos = await self.client.list_videos(query)
        except CatalogError as e:
            if generation != self._generation:
                client_logger.debug(f"Ignoring failure of superseded query {key}: {e}")
                return self.videos
            self.is_loading = False
            self.error = e
            raise

        self.cache.set(key, [video.model_dump(mode="json", by_alias=True) for video in videos])
        if generation != self._generation:
            client_logger.debug(f"Discarding stale response for {key}")
            return self.videos

        self.is_loading = False
        self.error = None
        self._show(query, videos)
        return self.videos

    async def set_sort(self, sort: SortKey | str) -> list[VideoItem]:
        if self.state.set_sort(sort):
            await self.refresh()
        return self.videos

    async def set_filters(self, filters: VideoFilters) -> list[VideoItem]:
        if self.state.set_filters(filters):
            await self.refresh()
        return self.videos

    async def set_tag_ids(self, tag_ids: list[str]) -> list[VideoItem]:
        if self.state.set_tag_ids(tag_ids):
            await self.refresh()
        return self.videos

    async def set_date_range(self, date_from: date | None, date_to: date | None) -> list[VideoItem]:
        if self.state.set_date_range(date_from, date_to):
            await self.refresh()
        return self.videos

    async def clear_filters(self) -> list[VideoItem]:
        if self.state.clear_filters():
            await self.refresh()
        return self.videos

    async def load_more(self) -> list[VideoItem]:
        """Grow the limit by one increment and refetch the whole list."""
        if not self.has_more or not self.state.load_more():
            return self.videos
        return await self.refresh()

    async def on_scroll(self, scroll_top: float, viewport_height: float, content_height: float) -> bool:
        """Load more when near the bottom. Returns True when a fetch was made."""
        if self.is_loading or not self.has_more:
            return False
        if not self.state.is_near_bottom(scroll_top, viewport_height, content_height):
            return False
        await self.load_more()
        return True

    async def create_video(
        self,
        title: str,
        duration: int,
        views: int,
        tag_ids: Iterable[str] | None = None,
    ) -> str:
        """Create a video, then drop cached lists and reload the current one."""
        video_id = await self.client.create_video(title, duration, views, tag_ids)
        self.cache.invalidate()
        await self.refresh(force=True)
        return video_id

    async def next_thumbnail_url(self) -> str:
        """Thumbnail the server will assign to the next created video."""
        count = await self.client.get_video_count()
        return thumbnail_url_for(count + 1, self.config)
