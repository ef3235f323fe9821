"""YouTube Data API client for video metadata and channel search."""

import logging
import re
from dataclasses import dataclass, field
from urllib.parse import parse_qs, urlparse

import httpx

from core.exceptions import InvalidVideoError, UpstreamServiceError, VideoNotFoundError

logger = logging.getLogger(__name__)

_VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{6,20}$")

# Preference order when choosing the episode thumbnail
THUMBNAIL_PREFERENCE = ("maxres", "high", "medium", "default")


@dataclass
class VideoMetadata:
    """Snippet fields used by ingestion"""

    video_id: str
    title: str
    description: str
    published_at: str
    thumbnails: dict[str, dict] = field(default_factory=dict)
    channel_title: str | None = None

    def best_thumbnail(self) -> str | None:
        for size in THUMBNAIL_PREFERENCE:
            url = (self.thumbnails.get(size) or {}).get("url")
            if url:
                return url
        return None


def extract_video_id(value: str) -> str:
    """
    Extract a video identifier from a watch URL or accept a bare id.

    Examples:
        "https://www.youtube.com/watch?v=abc123XYZ_-" -> "abc123XYZ_-"
        "abc123XYZ_-" -> "abc123XYZ_-"

    Raises:
        InvalidVideoError: If no identifier can be found
    """
    value = (value or "").strip()
    if not value:
        raise InvalidVideoError("Video ID is required")

    if "v=" in value or value.startswith("http"):
        parsed = urlparse(value)
        ids = parse_qs(parsed.query).get("v")
        if ids and _VIDEO_ID_PATTERN.match(ids[0]):
            return ids[0]
        raise InvalidVideoError(f"Could not find a video ID in: {value}")

    if not _VIDEO_ID_PATTERN.match(value):
        raise InvalidVideoError(f"Invalid video ID: {value}")
    return value


class YouTubeClient:
    """Async wrapper around the YouTube Data API v3."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://www.googleapis.com/youtube/v3",
        channel_id: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.channel_id = channel_id
        self.timeout = timeout
        self._transport = transport

    async def _get(self, path: str, params: dict) -> dict:
        query = {**params, "key": self.api_key}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(f"{self.base_url}/{path}", params=query)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"YouTube API request to /{path} failed: {e}")
            raise UpstreamServiceError("youtube", f"{path} request failed: {e}") from e

    async def get_video_details(self, video_id: str) -> VideoMetadata:
        """
        Fetch snippet metadata for a single video.

        Raises:
            VideoNotFoundError: If the API returns no item
            InvalidVideoError: If the item has no title
        """
        data = await self._get("videos", {"part": "snippet", "id": video_id})
        items = data.get("items") or []
        if not items:
            raise VideoNotFoundError("Video not found")

        snippet = items[0].get("snippet") or {}
        title = snippet.get("title")
        if not title:
            raise InvalidVideoError("Video title is missing")

        return VideoMetadata(
            video_id=video_id,
            title=title,
            description=snippet.get("description") or "",
            published_at=snippet.get("publishedAt") or "",
            thumbnails=snippet.get("thumbnails") or {},
            channel_title=snippet.get("channelTitle"),
        )

    async def search_videos(self, query: str = "", max_results: int = 10) -> list[VideoMetadata]:
        """Search the configured channel; an empty query lists the latest uploads."""
        params: dict = {
            "part": "snippet",
            "q": query,
            "maxResults": max_results,
            "type": "video",
            "order": "date",
        }
        if self.channel_id:
            params["channelId"] = self.channel_id

        data = await self._get("search", params)
        videos = []
        for item in data.get("items") or []:
            video_id = (item.get("id") or {}).get("videoId")
            snippet = item.get("snippet") or {}
            if not video_id:
                continue
            videos.append(
                VideoMetadata(
                    video_id=video_id,
                    title=snippet.get("title") or "",
                    description=snippet.get("description") or "",
                    published_at=snippet.get("publishedAt") or "",
                    thumbnails=snippet.get("thumbnails") or {},
                    channel_title=snippet.get("channelTitle"),
                )
            )
        return videos
