"""Model to response conversions shared by routes"""

from api.schemas import MomentResponse, PerformanceResponse, ReviewResponse
from core.utils import timestamp_to_seconds
from models.episode import Episode
from models.moment import Moment
from models.performance import Performance
from models.review import Review


def seek_seconds(timestamp: str) -> int | None:
    """Player seek offset for a stored timestamp, None if it cannot be parsed."""
    try:
        return timestamp_to_seconds(timestamp)
    except ValueError:
        return None


def performance_response(
    performance: Performance,
    episode: Episode | None = None,
    comedian_name: str | None = None,
) -> PerformanceResponse:
    return PerformanceResponse(
        comedian_key=performance.comedian_key,
        comedian_name=comedian_name,
        episode_id=performance.episode_id,
        episode_number=episode.number if episode else None,
        episode_title=episode.title if episode else None,
        start_time=performance.start_time,
        start_seconds=seek_seconds(performance.start_time),
        tags=list(performance.tags or []),
    )


def moment_response(moment: Moment) -> MomentResponse:
    return MomentResponse(
        id=moment.id,
        episode_id=moment.episode_id,
        timestamp=moment.timestamp,
        start_seconds=seek_seconds(moment.timestamp),
        title=moment.title,
        description=moment.description,
        category=moment.category,
        tags=list(moment.tags or []),
        user_id=moment.user_id,
        user_name=moment.user_name,
        upvotes=moment.upvotes,
        upvoted_by=list(moment.upvoted_by or []),
        created_at=moment.created_at,
    )


def review_response(review: Review) -> ReviewResponse:
    return ReviewResponse.model_validate(review.to_dict())
