"""Tests for draft episode assembly."""

import pytest

from core.exceptions import EpisodeNumberError, InvalidVideoError, UpstreamServiceError
from services.comedian_validator import ComicInfo
from services.episode_ingestion import EpisodeIngestionService, extract_episode_number
from services.summarizer import SummaryResult
from services.transcripts import TranscriptEntry
from services.youtube import VideoMetadata


class DummyYouTube:
    def __init__(self, video: VideoMetadata) -> None:
        self.video = video
        self.requested: list[str] = []

    async def get_video_details(self, video_id: str) -> VideoMetadata:
        self.requested.append(video_id)
        return self.video


class DummyTranscripts:
    def __init__(self, entries: list[TranscriptEntry] | None = None, error: Exception | None = None) -> None:
        self.entries = entries or []
        self.error = error
        self.calls = 0

    async def fetch(self, video_id: str) -> list[TranscriptEntry]:
        self.calls += 1
        if self.error:
            raise self.error
        return self.entries


class DummySummarizer:
    def __init__(self) -> None:
        self.texts: list[str] = []

    async def summarize(self, full_text: str) -> SummaryResult:
        self.texts.append(full_text)
        return SummaryResult(
            combined_summary="combined",
            episode_summary="Hans Kim closed the show.",
            highlights=["Hans Kim closed the show"],
        )


class DummyValidator:
    def __init__(self) -> None:
        self.candidates = []

    async def validate(self, candidates):  # type: ignore[no-untyped-def]
        self.candidates = candidates
        return [ComicInfo(name=c.name, start_time=c.start_time) for c in candidates if c.name == "Hans Kim"]


def _video(title: str = "KILL TONY #619 - Tony Hinchcliffe", thumbnails=None) -> VideoMetadata:  # type: ignore[no-untyped-def]
    return VideoMetadata(
        video_id="abc123XYZ_-",
        title=title,
        description="Live from the Comedy Mothership",
        published_at="2023-05-01T00:00:00Z",
        thumbnails=thumbnails if thumbnails is not None else {"maxres": {"url": "https://img/max.jpg"}},
    )


TRANSCRIPT = [
    TranscriptEntry(text="Welcome to the show", start=0.0),
    TranscriptEntry(text="please welcome Hans Kim", start=754.0),
    TranscriptEntry(text="brought to you by Cash App", start=800.0),
]


def _service(video=None, transcripts=None, summarizer=None, validator=None):  # type: ignore[no-untyped-def]
    return EpisodeIngestionService(
        youtube_client=DummyYouTube(video or _video()),
        transcript_fetcher=transcripts or DummyTranscripts(TRANSCRIPT),
        summarizer=summarizer or DummySummarizer(),
        validator=validator or DummyValidator(),
    )


class TestExtractEpisodeNumber:
    """Episode number patterns."""

    @pytest.mark.parametrize(
        ("title", "number"),
        [
            ("KILL TONY #619 - Tony Hinchcliffe", 619),
            ("Kill Tony Episode 500", 500),
            ("kill tony 432 live", 432),
            ("#12 and Episode 99", 12),
        ],
    )
    def test_patterns(self, title, number):
        assert extract_episode_number(title) == number

    def test_no_number(self):
        assert extract_episode_number("Best of the Bucket compilation") is None


class TestEpisodeIngestionService:
    """Pipeline ordering and failure modes."""

    async def test_builds_draft(self):
        summarizer = DummySummarizer()
        validator = DummyValidator()
        service = _service(summarizer=summarizer, validator=validator)

        draft = await service.build_draft("https://www.youtube.com/watch?v=abc123XYZ_-")

        assert draft.number == 619
        assert draft.video_id == "abc123XYZ_-"
        assert draft.thumbnail == "https://img/max.jpg"
        assert draft.episode_summary == "Hans Kim closed the show."
        assert draft.highlights == ["Hans Kim closed the show"]
        assert draft.comics == [ComicInfo(name="Hans Kim", start_time="12:34")]
        assert draft.name_candidates == ["Hans Kim"]
        assert summarizer.texts == [
            "Welcome to the show please welcome Hans Kim brought to you by Cash App"
        ]
        assert [c.name for c in validator.candidates] == ["Hans Kim", "Cash App"]
        assert set(service.stage_timings_ms) == {"metadata", "transcript", "summary", "comedians"}

    async def test_draft_dict_shape(self):
        draft = await _service().build_draft("abc123XYZ_-")

        data = draft.to_dict()

        assert data["transcript"][1] == {"text": "please welcome Hans Kim", "start": 754.0}
        assert data["comics"] == [{"name": "Hans Kim", "start_time": "12:34", "tags": []}]
        assert data["name_candidates"] == ["Hans Kim"]

    async def test_missing_episode_number_stops_before_transcript(self):
        transcripts = DummyTranscripts(TRANSCRIPT)
        service = _service(video=_video(title="Best of the Bucket"), transcripts=transcripts)

        with pytest.raises(EpisodeNumberError):
            await service.build_draft("abc123XYZ_-")

        assert transcripts.calls == 0

    async def test_episode_zero_rejected(self):
        transcripts = DummyTranscripts(TRANSCRIPT)
        service = _service(video=_video(title="KILL TONY #0 - Pilot"), transcripts=transcripts)

        with pytest.raises(EpisodeNumberError):
            await service.build_draft("abc123XYZ_-")

        assert transcripts.calls == 0

    async def test_missing_thumbnail(self):
        service = _service(video=_video(thumbnails={}))

        with pytest.raises(InvalidVideoError, match="No thumbnail URL found"):
            await service.build_draft("abc123XYZ_-")

    async def test_transcript_failure_propagates(self):
        summarizer = DummySummarizer()
        service = _service(
            transcripts=DummyTranscripts(error=UpstreamServiceError("transcript", "disabled")),
            summarizer=summarizer,
        )

        with pytest.raises(UpstreamServiceError):
            await service.build_draft("abc123XYZ_-")

        assert summarizer.texts == []
