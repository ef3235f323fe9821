"""Draft assembly for new episodes: metadata, transcript, summary and comedians."""

import logging
import re
import time
from dataclasses import dataclass, field

from core.exceptions import EpisodeNumberError, InvalidVideoError
from services.comedian_validator import ComedianValidator, ComicInfo
from services.name_extractor import extract_name_candidates, match_candidate_timestamps
from services.summarizer import EpisodeSummarizer
from services.transcripts import TranscriptEntry, TranscriptFetcher, join_transcript
from services.youtube import YouTubeClient, extract_video_id

logger = logging.getLogger(__name__)

EPISODE_NUMBER_PATTERNS = (
    re.compile(r"#(\d+)"),
    re.compile(r"Episode\s+(\d+)", re.IGNORECASE),
    re.compile(r"KILL TONY\s+(\d+)", re.IGNORECASE),
)


def extract_episode_number(title: str) -> int | None:
    """
    Parse the episode number from a video title.

    Examples:
        "KILL TONY #619 - Tony Hinchcliffe" -> 619
        "Kill Tony Episode 500" -> 500
    """
    for pattern in EPISODE_NUMBER_PATTERNS:
        match = pattern.search(title)
        if match:
            return int(match.group(1))
    return None


@dataclass
class EpisodeDraft:
    """Assembled episode awaiting admin curation"""

    video_id: str
    title: str
    description: str
    published_at: str
    number: int
    thumbnail: str
    transcript: list[TranscriptEntry]
    episode_summary: str
    highlights: list[str]
    comics: list[ComicInfo]
    tags: list[str] = field(default_factory=list)

    @property
    def name_candidates(self) -> list[str]:
        return [comic.name for comic in self.comics]

    def to_dict(self) -> dict:
        return {
            "video_id": self.video_id,
            "title": self.title,
            "description": self.description,
            "published_at": self.published_at,
            "number": self.number,
            "thumbnail": self.thumbnail,
            "transcript": [entry.to_dict() for entry in self.transcript],
            "episode_summary": self.episode_summary,
            "highlights": list(self.highlights),
            "comics": [comic.to_dict() for comic in self.comics],
            "name_candidates": self.name_candidates,
            "tags": list(self.tags),
        }


class EpisodeIngestionService:
    """Runs the read-only half of ingestion and returns a draft; nothing is persisted."""

    def __init__(
        self,
        youtube_client: YouTubeClient,
        transcript_fetcher: TranscriptFetcher,
        summarizer: EpisodeSummarizer,
        validator: ComedianValidator,
    ):
        self.youtube = youtube_client
        self.transcripts = transcript_fetcher
        self.summarizer = summarizer
        self.validator = validator
        self.stage_timings_ms: dict[str, float] = {}

    def _mark(self, stage: str, started: float) -> None:
        self.stage_timings_ms[stage] = (time.perf_counter() - started) * 1000

    async def build_draft(self, video: str) -> EpisodeDraft:
        """
        Assemble a draft episode for a video id or watch URL.

        Raises:
            InvalidVideoError: Bad identifier, missing title or thumbnail
            VideoNotFoundError: Unknown video
            EpisodeNumberError: Title carries no episode number
            UpstreamServiceError: Any API failure
        """
        video_id = extract_video_id(video)
        logger.info(f"Processing video: {video_id}")

        started = time.perf_counter()
        metadata = await self.youtube.get_video_details(video_id)
        self._mark("metadata", started)

        number = extract_episode_number(metadata.title)
        if number is None or number < 1:
            raise EpisodeNumberError(
                f"Could not determine episode number from title: {metadata.title!r}"
            )

        thumbnail = metadata.best_thumbnail()
        if not thumbnail:
            raise InvalidVideoError("No thumbnail URL found")

        started = time.perf_counter()
        transcript = await self.transcripts.fetch(video_id)
        full_text = join_transcript(transcript)
        self._mark("transcript", started)

        started = time.perf_counter()
        summary = await self.summarizer.summarize(full_text)
        self._mark("summary", started)

        started = time.perf_counter()
        candidates = match_candidate_timestamps(extract_name_candidates(full_text), transcript)
        logger.info(f"Found {len(candidates)} name candidates with timestamps")
        comics = await self.validator.validate(candidates)
        self._mark("comedians", started)

        logger.info(
            f"Draft ready for episode #{number}: {len(comics)} comedians, "
            f"{len(summary.highlights)} highlights"
        )

        return EpisodeDraft(
            video_id=video_id,
            title=metadata.title,
            description=metadata.description,
            published_at=metadata.published_at,
            number=number,
            thumbnail=thumbnail,
            transcript=transcript,
            episode_summary=summary.episode_summary,
            highlights=summary.highlights,
            comics=comics,
        )
