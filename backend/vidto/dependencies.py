"""Request-scoped dependencies shared by the routers."""

from contextlib import contextmanager
from typing import Annotated, Iterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from vidto.config import Settings
from vidto.database import get_db
from vidto.errors import StoreError, ValidationError
from vidto.logger import api_logger
from vidto.services.tag_service import TagService
from vidto.services.video_service import VideoService


def get_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_video_service(
    db: Annotated[Session, Depends(get_db)],
    config: Annotated[Settings, Depends(get_settings)],
) -> VideoService:
    return VideoService(db, config)


def get_tag_service(db: Annotated[Session, Depends(get_db)]) -> TagService:
    return TagService(db)


@contextmanager
def service_errors(action: str) -> Iterator[None]:
    """Translate service errors into HTTP responses."""
    try:
        yield
    except ValidationError as e:
        api_logger.warning(f"Invalid request to {action}: {e.message}")
        raise HTTPException(
            status_code=422,
            detail=e.message,
        )
    except StoreError as e:
        api_logger.error(f"Store failure during {action}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Store unavailable: {str(e)}",
        )
