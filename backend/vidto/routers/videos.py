"""Videos router for browsing and adding catalog entries."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from vidto.dependencies import get_video_service, service_errors
from vidto.schemas.video import SortKey, VideoCreate, VideoCreated, VideoItem
from vidto.services.video_service import VideoService

router = APIRouter(prefix="/videos")


def split_ids(values: list[str] | None) -> list[str]:
    """Accept repeated query params and comma-separated lists alike."""
    ids: list[str] = []
    for value in values or []:
        ids.extend(part.strip() for part in value.split(",") if part.strip())
    return ids


@router.get("", response_model=list[VideoItem])
async def list_videos(
    video_service: Annotated[VideoService, Depends(get_video_service)],
    limit: int | None = Query(None, ge=1, description="Number of videos to return"),
    sort: SortKey = Query(SortKey.NEWEST, description="Sort order"),
    tag_ids: list[str] | None = Query(
        None, alias="tagIds", description="Tag IDs (any match), repeated or comma-separated"
    ),
    date_from: date | None = Query(None, alias="dateFrom", description="First day included"),
    date_to: date | None = Query(None, alias="dateTo", description="Last day included"),
):
    """
    Get videos for the gallery.

    Supports:
    - Sorting by creation date or views, in either direction
    - Filtering by tags (a video matches if it has any selected tag)
    - Filtering by an inclusive creation date range
    - "Load more" by growing the limit
    """
    with service_errors("list videos"):
        return video_service.list_videos(
            limit=limit,
            sort=sort,
            tag_ids=split_ids(tag_ids),
            date_from=date_from,
            date_to=date_to,
        )


@router.get("/count", response_model=int)
async def get_video_count(
    video_service: Annotated[VideoService, Depends(get_video_service)],
):
    """Total number of videos in the catalog."""
    with service_errors("count videos"):
        return video_service.get_video_count()


@router.get("/{video_id}", response_model=VideoItem | None)
async def get_video(
    video_id: str,
    video_service: Annotated[VideoService, Depends(get_video_service)],
):
    """Get a single video with its tags. Returns null when it does not exist."""
    with service_errors("get video"):
        return video_service.get_video(video_id)


@router.post("", response_model=VideoCreated, status_code=status.HTTP_201_CREATED)
async def create_video(
    payload: VideoCreate,
    video_service: Annotated[VideoService, Depends(get_video_service)],
):
    """
    Add a video to the catalog.

    The thumbnail is assigned from the image host using the next video
    number as seed.
    """
    with service_errors("create video"):
        video_id = video_service.create_video(
            title=payload.title,
            duration=payload.duration,
            views=payload.views,
            tag_ids=payload.tag_ids,
        )
    return VideoCreated(id=video_id)
