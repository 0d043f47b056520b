"""Tags router for the shared tag vocabulary."""

from typing import Annotated, List

from fastapi import APIRouter, Depends, status

from vidto.dependencies import get_tag_service, service_errors
from vidto.schemas.tag import TagCreate, TagResponse
from vidto.services.tag_service import TagService

router = APIRouter(prefix="/tags")


@router.get("", response_model=List[TagResponse])
async def list_tags(
    tag_service: Annotated[TagService, Depends(get_tag_service)],
):
    """Get all tags ordered alphabetically by name."""
    with service_errors("list tags"):
        return tag_service.list_tags()


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    tag_service: Annotated[TagService, Depends(get_tag_service)],
):
    """Create a tag. Names are unique."""
    with service_errors("create tag"):
        return tag_service.create_tag(payload.name, payload.color)
