"""Video queries and the create path."""

import uuid
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterable, Iterator

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from vidto.config import Settings, settings as default_settings
from vidto.errors import StoreError, ValidationError
from vidto.logger import api_logger, db_logger
from vidto.models.tag import Tag, video_tags
from vidto.models.video import Video, utcnow
from vidto.schemas.video import SortKey, VideoItem
from vidto.utils.thumbnails import thumbnail_url_for


def coerce_sort_key(sort: SortKey | str) -> SortKey:
    """Accept a SortKey or its wire value."""
    try:
        return SortKey(sort)
    except ValueError:
        raise ValidationError(f"Unsupported sort key: {sort!r}", field="sort") from None


def order_by_for(sort: SortKey) -> tuple:
    """
    ORDER BY clauses for a sort key.

    Videos with equal sort values are ordered by id so that growing the
    limit never reshuffles rows that were already shown.
    """
    match sort:
        case SortKey.NEWEST:
            primary = Video.created_at.desc()
        case SortKey.OLDEST:
            primary = Video.created_at.asc()
        case SortKey.MOST_VIEWS:
            primary = Video.views.desc()
        case SortKey.LEAST_VIEWS:
            primary = Video.views.asc()
        case _:
            raise ValidationError(f"Unsupported sort key: {sort!r}", field="sort")
    return primary, Video.id.asc()


def _as_date(value: date | datetime | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


def date_range_predicates(date_from: date | None, date_to: date | None) -> list:
    """
    Inclusive day-granularity range on created_at.

    created_at carries a time of day, so the upper bound is the start of
    the day after date_to.
    """
    predicates = []
    if date_from is not None:
        predicates.append(Video.created_at >= datetime.combine(date_from, time.min))
    if date_to is not None:
        upper = datetime.combine(date_to + timedelta(days=1), time.min)
        predicates.append(Video.created_at < upper)
    return predicates


def unique_ids(ids: Iterable[str] | None) -> list[str]:
    """Drop duplicates and blanks, keep first-seen order."""
    seen: dict[str, None] = {}
    for item in ids or []:
        item = item.strip()
        if item:
            seen.setdefault(item, None)
    return list(seen)


class VideoService:
    """Builds the gallery queries and writes new videos."""

    def __init__(
        self,
        db: Session,
        config: Settings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.config = config or default_settings
        self.clock = clock

    @contextmanager
    def _store_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            db_logger.error(f"Failed to {action}: {e}")
            raise StoreError(str(e)) from e

    def _validate_limit(self, limit: int | None) -> int:
        if limit is None:
            return self.config.default_page_size
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValidationError("Limit must be an integer", field="limit")
        if limit < 1 or limit > self.config.max_page_size:
            raise ValidationError(
                f"Limit must be between 1 and {self.config.max_page_size}",
                field="limit",
            )
        return limit

    def list_videos(
        self,
        limit: int | None = None,
        sort: SortKey | str = SortKey.NEWEST,
        tag_ids: Iterable[str] | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[VideoItem]:
        """
        List videos for the gallery.

        Args:
            limit: Maximum number of videos (grows on "load more", no offset)
            sort: Sort key
            tag_ids: Keep videos having ANY of these tags
            date_from: First day included (created_at)
            date_to: Last day included (created_at)

        Returns:
            Videos in the requested order, each with its full tag list
        """
        limit = self._validate_limit(limit)
        sort = coerce_sort_key(sort)
        tag_ids = unique_ids(tag_ids)
        date_from, date_to = _as_date(date_from), _as_date(date_to)
        if date_from and date_to and date_from > date_to:
            raise ValidationError("dateFrom must not be after dateTo", field="date_from")

        order = order_by_for(sort)
        predicates = date_range_predicates(date_from, date_to)

        with self._store_errors("list videos"):
            if tag_ids:
                videos = self._list_by_tags(tag_ids, predicates, order, limit)
            else:
                videos = (
                    self.db.query(Video)
                    .options(selectinload(Video.tags))
                    .filter(*predicates)
                    .order_by(*order)
                    .limit(limit)
                    .all()
                )

        api_logger.debug(
            f"Listed {len(videos)} videos (limit={limit}, sort={sort.value}, tags={len(tag_ids)})"
        )
        return [VideoItem.model_validate(video) for video in videos]

    def _list_by_tags(
        self, tag_ids: list[str], predicates: list, order: tuple, limit: int
    ) -> list[Video]:
        # Pass 1: distinct matching ids, already sorted and limited. Joining
        # the link table yields one row per matching tag, hence the grouping.
        matching = (
            self.db.query(Video.id)
            .join(video_tags, video_tags.c.video_id == Video.id)
            .filter(video_tags.c.tag_id.in_(tag_ids))
            .filter(*predicates)
            .group_by(Video.id)
            .order_by(*order)
            .limit(limit)
            .all()
        )
        ids = [row.id for row in matching]
        if not ids:
            return []

        # Pass 2: hydrate with every tag, not only the ones that matched
        videos = (
            self.db.query(Video)
            .options(selectinload(Video.tags))
            .filter(Video.id.in_(ids))
            .all()
        )
        position = {video_id: index for index, video_id in enumerate(ids)}
        videos.sort(key=lambda video: position[video.id])
        return videos

    def get_video(self, video_id: str) -> VideoItem | None:
        """Single video with tags, or None when absent."""
        with self._store_errors("get video"):
            video = (
                self.db.query(Video)
                .options(selectinload(Video.tags))
                .filter(Video.id == video_id)
                .first()
            )
        return VideoItem.model_validate(video) if video else None

    def get_video_count(self) -> int:
        with self._store_errors("count videos"):
            return self.db.query(func.count(Video.id)).scalar() or 0

    def create_video(
        self,
        title: str,
        duration: int,
        views: int,
        tag_ids: Iterable[str] | None = None,
    ) -> str:
        """
        Create a video and link its tags in one transaction.

        Args:
            title: Non-empty title
            duration: Length in seconds (>= 1)
            views: View count (>= 0)
            tag_ids: Existing tag ids to attach

        Returns:
            The new video id

        Raises:
            ValidationError: Bad input or unknown tag ids; nothing is written
            StoreError: The store failed; the transaction is rolled back
        """
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Title is required", field="title")
        title = title.strip()
        if isinstance(duration, bool) or not isinstance(duration, int) or duration < 1:
            raise ValidationError("Duration must be at least 1 second", field="duration")
        if isinstance(views, bool) or not isinstance(views, int) or views < 0:
            raise ValidationError("Views must not be negative", field="views")
        tag_ids = unique_ids(tag_ids)

        try:
            tags: list[Tag] = []
            if tag_ids:
                tags = self.db.query(Tag).filter(Tag.id.in_(tag_ids)).all()
                missing = set(tag_ids) - {tag.id for tag in tags}
                if missing:
                    raise ValidationError(
                        f"Unknown tag ids: {', '.join(sorted(missing))}",
                        field="tag_ids",
                    )

            current_count = self.db.query(func.count(Video.id)).scalar() or 0
            video = Video(
                id=str(uuid.uuid4()),
                title=title,
                thumbnail_url=thumbnail_url_for(current_count + 1, self.config),
                duration=duration,
                views=views,
                created_at=self.clock(),
            )
            video.tags = tags
            self.db.add(video)
            self.db.commit()
        except ValidationError as e:
            self.db.rollback()
            api_logger.warning(f"Rejected video: {e.message}")
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            db_logger.error(f"Failed to create video: {e}")
            raise StoreError(str(e)) from e

        api_logger.info(f"Created video {video.id} with {len(tags)} tags")
        return video.id
