#!/usr/bin/env python3
"""Draft and optionally publish an episode from a video URL.

Runs the same pipeline as the admin endpoints without going through HTTP.

Usage:
    python scripts/ingest_episode.py "https://www.youtube.com/watch?v=VIDEO_ID"
    python scripts/ingest_episode.py VIDEO_ID --publish
    python scripts/ingest_episode.py VIDEO_ID --output draft.json
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.dependencies import (
    get_gemini_client,
    get_ingestion_service,
    get_transcript_fetcher,
    get_youtube_client,
)
from core.database import close_db, get_session_maker
from core.exceptions import BucketPullError
from core.logging_config import setup_logging
from services.episode_publisher import CuratedComic, CuratedEpisode, EpisodePublisher
from storage.episode_store import EpisodeStore

logger = logging.getLogger(__name__)


def _parse_published_at(value: str) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def run(video: str, publish: bool, output: Path | None) -> int:
    gemini = get_gemini_client()
    ingestion = get_ingestion_service(
        youtube_client=get_youtube_client(),
        transcript_fetcher=get_transcript_fetcher(),
        gemini_client=gemini,
    )

    try:
        draft = await ingestion.build_draft(video)
    except BucketPullError as e:
        logger.error(f"Ingestion failed: {e.message}")
        return 1

    logger.info(f"Stage timings (ms): {ingestion.stage_timings_ms}")
    logger.info(f"Token usage: {sum(u['total_tokens'] for u in gemini.usage_log)}")

    if output:
        output.write_text(json.dumps(draft.to_dict(), indent=2))
        logger.info(f"Draft written to {output}")

    if not publish:
        for comic in draft.comics:
            print(f"{comic.start_time}  {comic.name}")
        return 0

    curated = CuratedEpisode(
        video_id=draft.video_id,
        number=draft.number,
        title=draft.title,
        description=draft.description,
        published_at=_parse_published_at(draft.published_at),
        thumbnail=draft.thumbnail,
        transcript=[entry.to_dict() for entry in draft.transcript],
        episode_summary=draft.episode_summary,
        highlights=draft.highlights,
        comics=[CuratedComic(c.name, c.start_time, list(c.tags)) for c in draft.comics],
        tags=draft.tags,
    )

    async with get_session_maker()() as session:
        try:
            episode_id = await EpisodePublisher(EpisodeStore(session)).publish(curated)
        except BucketPullError as e:
            logger.error(f"Publish failed: {e.message}")
            return 1
    await close_db()

    logger.info(f"Published episode #{draft.number} as {episode_id}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Ingest an episode from a video")
    parser.add_argument("video", help="Video ID or watch URL")
    parser.add_argument("--publish", action="store_true", help="Persist the draft as-is")
    parser.add_argument("--output", type=Path, help="Write the draft JSON to this file")
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(run(args.video, args.publish, args.output)))


if __name__ == "__main__":
    main()
