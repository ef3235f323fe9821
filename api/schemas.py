"""API Pydantic schemas for request/response validation"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

MomentCategory = Literal["bomb", "roast", "comeback", "sound-effect", "musical-burn", "other"]


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(default="healthy")
    database_connected: bool = False
    database_error: str | None = None
    version: str = Field(default="0.1.0")


# Admin ingestion


class ProcessVideoRequest(BaseModel):
    """Video id or watch URL to draft an episode from"""

    video_id: str = Field(alias="videoId")

    model_config = {"populate_by_name": True}


class TranscriptEntrySchema(BaseModel):
    text: str
    start: float = 0.0


class ComicSchema(BaseModel):
    name: str = Field(min_length=1)
    start_time: str
    tags: list[str] = []


class EpisodeDraftResponse(BaseModel):
    """Draft episode returned to the admin for curation"""

    video_id: str
    title: str
    description: str
    published_at: str
    number: int
    thumbnail: str
    transcript: list[TranscriptEntrySchema]
    episode_summary: str
    highlights: list[str]
    comics: list[ComicSchema]
    name_candidates: list[str]
    tags: list[str] = []


class CreateEpisodeRequest(BaseModel):
    """Curated episode payload"""

    video_id: str
    number: int = Field(ge=1)
    title: str
    description: str = ""
    published_at: datetime | None = None
    thumbnail: str | None = None
    transcript: list[TranscriptEntrySchema] = []
    episode_summary: str = ""
    highlights: list[str] = []
    comics: list[ComicSchema] = []
    tags: list[str] = []


class CreateEpisodeResponse(BaseModel):
    success: bool = True
    episode_id: UUID


class SetAdminClaimRequest(BaseModel):
    user_id: str = Field(alias="userId", min_length=1)

    model_config = {"populate_by_name": True}


class VideoSearchResult(BaseModel):
    video_id: str
    title: str
    description: str
    published_at: str
    thumbnail: str | None = None


# Episodes and comedians


class EpisodeSummaryResponse(BaseModel):
    """Episode list item"""

    id: UUID
    video_id: str
    number: int
    title: str
    published_at: datetime | None = None
    thumbnail: str | None = None
    summary: str = ""
    tags: list[str] = []


class PerformanceResponse(BaseModel):
    comedian_key: str
    comedian_name: str | None = None
    episode_id: UUID
    episode_number: int | None = None
    episode_title: str | None = None
    start_time: str
    start_seconds: int | None = None
    tags: list[str] = []


class EpisodeDetailResponse(EpisodeSummaryResponse):
    description: str = ""
    transcript: list[TranscriptEntrySchema] = []
    highlights: list[str] = []
    comics: list[ComicSchema] = []
    performances: list[PerformanceResponse] = []
    moments: list["MomentResponse"] = []
    average_rating: float | None = None
    review_count: int = 0


class SocialLinks(BaseModel):
    instagram: str = ""
    website: str = ""
    youtube: str = ""
    twitter: str = ""


class ComedianResponse(BaseModel):
    key: str
    name: str
    bio: str | None = None
    image_url: str | None = None
    social_links: SocialLinks
    total_appearances: int
    first_appearance: datetime | None = None
    last_appearance: datetime | None = None
    golden_ticket: bool = False
    regular_guest: bool = False
    hall_of_fame: bool = False
    average_rating: float | None = None
    review_count: int = 0


class ComedianDetailResponse(ComedianResponse):
    performances: list[PerformanceResponse] = []
    reviews: list["ReviewResponse"] = []


# Reviews and moments


class ReviewCreate(BaseModel):
    """Review or reply submission"""

    episode_id: UUID | None = None
    comedian_key: str | None = None
    user_id: str = Field(min_length=1)
    user_name: str = "Anonymous"
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str = ""
    parent_id: UUID | None = None


class ReviewResponse(BaseModel):
    id: UUID
    episode_id: UUID | None = None
    comedian_key: str | None = None
    user_id: str
    user_name: str
    rating: int | None = None
    comment: str
    parent_id: UUID | None = None
    replies: list[str] = []
    upvotes: int = 0
    upvoted_by: list[str] = []
    created_at: datetime | None = None


class UpvoteRequest(BaseModel):
    target_id: UUID
    user_id: str = Field(min_length=1)


class UpvoteResponse(BaseModel):
    success: bool = True
    upvotes: int
    has_upvoted: bool


class SubmitResponse(BaseModel):
    success: bool = True
    id: UUID


class MomentCreate(BaseModel):
    """Bit submission"""

    episode_id: UUID
    timestamp: str
    title: str | None = None
    description: str = Field(min_length=1)
    category: MomentCategory = "other"
    tags: list[str] = []
    user_id: str = Field(min_length=1)
    user_name: str = "Anonymous"


class MomentResponse(BaseModel):
    id: UUID
    episode_id: UUID
    timestamp: str
    start_seconds: int | None = None
    title: str | None = None
    description: str
    category: str
    tags: list[str] = []
    user_id: str
    user_name: str
    upvotes: int = 0
    upvoted_by: list[str] = []
    created_at: datetime | None = None


class ErrorResponse(BaseModel):
    """Error response"""

    detail: str


EpisodeDetailResponse.model_rebuild()
ComedianDetailResponse.model_rebuild()
