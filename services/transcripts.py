"""Timed transcript fetching via youtube-transcript-api."""

import asyncio
import logging
from dataclasses import dataclass

from youtube_transcript_api import YouTubeTranscriptApi

from core.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


@dataclass
class TranscriptEntry:
    """One caption segment with its start offset in seconds"""

    text: str
    start: float = 0.0

    def to_dict(self) -> dict:
        return {"text": self.text, "start": self.start}


def join_transcript(entries: list[TranscriptEntry]) -> str:
    """Full transcript text, segments joined by single spaces."""
    return " ".join(entry.text for entry in entries)


class TranscriptFetcher:
    """Fetches transcripts; the underlying library is blocking so calls run in a thread."""

    def __init__(self, api: YouTubeTranscriptApi | None = None, languages: tuple[str, ...] = ("en",)):
        self.api = api or YouTubeTranscriptApi()
        self.languages = languages

    def _fetch_sync(self, video_id: str) -> list[TranscriptEntry]:
        fetched = self.api.fetch(video_id, languages=list(self.languages))
        return [
            TranscriptEntry(
                text=snippet.text,
                start=float(getattr(snippet, "start", None) or 0.0),
            )
            for snippet in fetched
        ]

    async def fetch(self, video_id: str) -> list[TranscriptEntry]:
        """
        Fetch the ordered transcript for a video.

        Raises:
            UpstreamServiceError: If no transcript can be retrieved
        """
        try:
            entries = await asyncio.to_thread(self._fetch_sync, video_id)
        except Exception as e:
            logger.error(f"Transcript fetch failed for {video_id}: {e}")
            raise UpstreamServiceError("transcript", str(e)) from e

        logger.info(f"Fetched {len(entries)} transcript segments for {video_id}")
        return entries
