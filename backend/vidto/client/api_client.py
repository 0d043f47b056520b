"""Async HTTP client for the catalog API."""

from typing import Any, Iterable

import httpx

from vidto.client.state import GalleryQuery
from vidto.config import settings
from vidto.errors import CatalogError, StoreError, ValidationError
from vidto.logger import client_logger
from vidto.schemas.tag import TagResponse
from vidto.schemas.video import VideoItem


def _error_detail(response: httpx.Response) -> str:
    """Flatten FastAPI error bodies (string detail or validation error list)."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    detail = body.get("detail", body) if isinstance(body, dict) else body
    if isinstance(detail, list):
        messages = []
        for error in detail:
            if not isinstance(error, dict):
                messages.append(str(error))
                continue
            location = ".".join(str(part) for part in error.get("loc", [])[1:])
            message = error.get("msg", "invalid value")
            messages.append(f"{location}: {message}" if location else message)
        return "; ".join(messages)
    return str(detail)


class CatalogClient:
    """One coroutine per catalog procedure."""

    def __init__(
        self,
        base_url: str | None = None,
        http: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        """
        Args:
            base_url: API root including the prefix (defaults to settings.api_base_url)
            http: Pre-built httpx client (tests pass one bound to the ASGI app)
            timeout: Request timeout in seconds
        """
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url, timeout=timeout
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            client_logger.error(f"{method} {path} failed: {e}")
            raise StoreError(f"Request failed: {e}") from e

        if response.status_code == 422:
            raise ValidationError(_error_detail(response))
        if response.status_code >= 500:
            raise StoreError(_error_detail(response))
        if response.status_code >= 400:
            raise CatalogError(f"{response.status_code}: {_error_detail(response)}")
        return response.json()

    async def list_videos(self, query: GalleryQuery) -> list[VideoItem]:
        data = await self._request("GET", "videos", params=query.to_params())
        return [VideoItem.model_validate(item) for item in data]

    async def get_video(self, video_id: str) -> VideoItem | None:
        data = await self._request("GET", f"videos/{video_id}")
        return VideoItem.model_validate(data) if data is not None else None

    async def get_video_count(self) -> int:
        return int(await self._request("GET", "videos/count"))

    async def create_video(
        self,
        title: str,
        duration: int,
        views: int,
        tag_ids: Iterable[str] | None = None,
    ) -> str:
        payload: dict[str, Any] = {"title": title, "duration": duration, "views": views}
        if tag_ids:
            payload["tagIds"] = list(tag_ids)
        data = await self._request("POST", "videos", json=payload)
        return data["id"]

    async def list_tags(self) -> list[TagResponse]:
        data = await self._request("GET", "tags")
        return [TagResponse.model_validate(item) for item in data]

    async def create_tag(self, name: str, color: str) -> TagResponse:
        data = await self._request("POST", "tags", json={"name": name, "color": color})
        return TagResponse.model_validate(data)
