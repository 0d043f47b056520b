"""Gallery query state: sort, filters and the growing page limit."""

from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator

from vidto.config import Settings, settings as default_settings
from vidto.errors import ValidationError
from vidto.schemas.video import SortKey, VideoFilters


class GalleryQuery(BaseModel):
    """Immutable snapshot of everything that determines the video list."""

    model_config = ConfigDict(frozen=True)

    limit: int
    sort: SortKey = SortKey.NEWEST
    tag_ids: tuple[str, ...] = ()
    date_from: date | None = None
    date_to: date | None = None

    @field_validator("tag_ids", mode="before")
    @classmethod
    def normalize_tag_ids(cls, value) -> tuple[str, ...]:
        # Equal filters must give equal keys regardless of selection order
        return tuple(sorted({tag_id for tag_id in value or () if tag_id}))

    def cache_key(self) -> str:
        return ":".join(
            [
                "videos",
                self.sort.value,
                str(self.limit),
                ",".join(self.tag_ids),
                self.date_from.isoformat() if self.date_from else "",
                self.date_to.isoformat() if self.date_to else "",
            ]
        )

    def to_params(self) -> dict:
        """Query string parameters for GET /videos."""
        params: dict = {"limit": self.limit, "sort": self.sort.value}
        if self.tag_ids:
            params["tagIds"] = list(self.tag_ids)
        if self.date_from:
            params["dateFrom"] = self.date_from.isoformat()
        if self.date_to:
            params["dateTo"] = self.date_to.isoformat()
        return params


def _filters_key(filters: VideoFilters) -> tuple:
    return tuple(sorted(set(filters.tag_ids))), filters.date_from, filters.date_to


class GalleryState:
    """
    Owns sort, filters and limit for the gallery.

    Changing the sort or any filter resets the limit to the first page so a
    large accumulated page is never shown under a different query. Loading
    more grows the limit; the whole list is refetched with the new limit.
    """

    def __init__(self, config: Settings | None = None, sort: SortKey = SortKey.NEWEST):
        config = config or default_settings
        self.page_size = config.default_page_size
        self.page_increment = config.page_increment
        self.max_limit = config.max_page_size
        self.scroll_threshold = config.scroll_threshold_px
        self.limit = self.page_size
        self.sort = sort
        self.filters = VideoFilters()

    @property
    def query(self) -> GalleryQuery:
        return GalleryQuery(
            limit=self.limit,
            sort=self.sort,
            tag_ids=self.filters.tag_ids,
            date_from=self.filters.date_from,
            date_to=self.filters.date_to,
        )

    def _reset_limit(self) -> None:
        self.limit = self.page_size

    def set_sort(self, sort: SortKey | str) -> bool:
        """Returns True when the sort changed."""
        sort = SortKey(sort)
        if sort == self.sort:
            return False
        self.sort = sort
        self._reset_limit()
        return True

    def set_filters(self, filters: VideoFilters) -> bool:
        """Replace all filters. Returns True when they changed."""
        if filters.date_from and filters.date_to and filters.date_from > filters.date_to:
            raise ValidationError("Date range ends before it starts", field="date_to")
        if _filters_key(filters) == _filters_key(self.filters):
            return False
        self.filters = filters
        self._reset_limit()
        return True

    def set_tag_ids(self, tag_ids: list[str]) -> bool:
        return self.set_filters(self.filters.model_copy(update={"tag_ids": list(tag_ids)}))

    def set_date_range(self, date_from: date | None, date_to: date | None) -> bool:
        return self.set_filters(
            self.filters.model_copy(update={"date_from": date_from, "date_to": date_to})
        )

    def clear_filters(self) -> bool:
        return self.set_filters(VideoFilters())

    def load_more(self) -> bool:
        """
        Grow the limit by one increment, stopping at the largest page the
        API serves. Returns True when the limit grew.
        """
        if self.at_max_limit:
            return False
        self.limit = min(self.limit + self.page_increment, self.max_limit)
        return True

    def is_near_bottom(self, scroll_top: float, viewport_height: float, content_height: float) -> bool:
        return viewport_height + scroll_top >= content_height - self.scroll_threshold

    def on_scroll(self, scroll_top: float, viewport_height: float, content_height: float) -> bool:
        """Grow the limit when the viewport is near the end of the content."""
        if self.is_near_bottom(scroll_top, viewport_height, content_height):
            return self.load_more()
        return False

    @property
    def has_active_filters(self) -> bool:
        return bool(self.filters.tag_ids or self.filters.date_from or self.filters.date_to)

    @property
    def active_filter_count(self) -> int:
        """Selected tags plus one for a date range."""
        has_range = bool(self.filters.date_from or self.filters.date_to)
        return len(set(self.filters.tag_ids)) + (1 if has_range else 0)

    @property
    def at_max_limit(self) -> bool:
        return self.limit >= self.max_limit

    @property
    def past_first_page(self) -> bool:
        """True once the limit has grown beyond the first page."""
        return self.limit > self.page_size
