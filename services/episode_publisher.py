"""Persists curated episodes and fans appearances out to comedian profiles."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from core.exceptions import DuplicateEpisodeError, InvalidTimestampError
from core.utils import comedian_key, validate_and_normalize_timestamp
from storage.episode_store import EpisodeStore

logger = logging.getLogger(__name__)


@dataclass
class CuratedComic:
    name: str
    start_time: str
    tags: list[str] = field(default_factory=list)


@dataclass
class CuratedEpisode:
    """Admin-approved episode payload"""

    video_id: str
    number: int
    title: str
    description: str
    published_at: datetime | None
    thumbnail: str | None
    transcript: list[dict]
    episode_summary: str
    highlights: list[str]
    comics: list[CuratedComic]
    tags: list[str] = field(default_factory=list)


def normalize_comic(comic: CuratedComic) -> CuratedComic:
    """Copy of the comic with its start time normalized, e.g. "9:5" -> "09:05"."""
    timestamp = validate_and_normalize_timestamp(comic.start_time)
    if not timestamp.valid:
        raise InvalidTimestampError(f"Invalid start time for {comic.name}: {timestamp.error}")
    return CuratedComic(name=comic.name, start_time=timestamp.normalized, tags=list(comic.tags))


class EpisodePublisher:
    """Writes the episode, then one profile upsert and performance per comic."""

    def __init__(self, store: EpisodeStore):
        self.store = store

    async def publish(self, payload: CuratedEpisode) -> UUID:
        """
        Persist a curated episode.

        The episode is committed before any comedian write and each comic is
        committed separately; a failure part way through leaves the episode
        with partial comedian linkage.

        Raises:
            InvalidTimestampError: A comic start time is malformed or out of range
            DuplicateEpisodeError: Number or video already stored
        """
        comics = [normalize_comic(comic) for comic in payload.comics]

        if await self.store.episode_exists(payload.number, payload.video_id):
            raise DuplicateEpisodeError(
                f"Episode #{payload.number} ({payload.video_id}) already exists"
            )

        episode = await self.store.create_episode(
            video_id=payload.video_id,
            number=payload.number,
            title=payload.title,
            description=payload.description,
            published_at=payload.published_at,
            thumbnail=payload.thumbnail,
            transcript=list(payload.transcript),
            summary=payload.episode_summary,
            highlights=list(payload.highlights),
            comics=[
                {"name": comic.name, "start_time": comic.start_time, "tags": list(comic.tags)}
                for comic in comics
            ],
            tags=list(payload.tags),
        )
        logger.info(f"Created episode #{episode.number} ({episode.id})")

        for comic in comics:
            key = comedian_key(comic.name)
            await self.store.record_appearance(key, comic.name, payload.published_at)
            await self.store.add_performance(key, episode.id, comic.start_time, comic.tags)
            await self.store.commit()
            logger.info(f"Linked {comic.name} ({key}) to episode #{episode.number}")

        return episode.id
