"""Episode browsing API endpoints"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from api.converters import moment_response, performance_response
from api.schemas import EpisodeDetailResponse, EpisodeSummaryResponse
from app.dependencies import get_episode_store, get_moment_store
from models.episode import Episode
from storage.community_store import MomentStore
from storage.episode_store import EpisodeStore

router = APIRouter(prefix="/api/episodes", tags=["Episodes"])


def _summary(episode: Episode) -> EpisodeSummaryResponse:
    return EpisodeSummaryResponse(
        id=episode.id,
        video_id=episode.video_id,
        number=episode.number,
        title=episode.title,
        published_at=episode.published_at,
        thumbnail=episode.thumbnail,
        summary=episode.summary,
        tags=list(episode.tags or []),
    )


async def _detail(
    episode: Episode,
    store: EpisodeStore,
    moments: MomentStore,
) -> EpisodeDetailResponse:
    performances = await store.list_episode_performances(episode.id)
    average, count = await store.rating_summary(episode_id=episode.id)
    episode_moments = await moments.list_moments(episode_id=episode.id)

    return EpisodeDetailResponse(
        **_summary(episode).model_dump(),
        description=episode.description,
        transcript=list(episode.transcript or []),
        highlights=list(episode.highlights or []),
        comics=list(episode.comics or []),
        performances=[performance_response(p, episode) for p in performances],
        moments=[moment_response(m) for m in episode_moments],
        average_rating=average,
        review_count=count,
    )


@router.get("/", response_model=list[EpisodeSummaryResponse])
async def list_episodes(
    store: EpisodeStore = Depends(get_episode_store),
    search: str | None = Query(None, description="Match title or description"),
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
):
    """
    List episodes, newest number first.

    Returns:
        Paginated list of episodes
    """
    episodes = await store.list_episodes(page=page, per_page=per_page, search=search)
    return [_summary(episode) for episode in episodes]


@router.get("/number/{number}", response_model=EpisodeDetailResponse)
async def get_episode_by_number(
    number: int,
    store: EpisodeStore = Depends(get_episode_store),
    moments: MomentStore = Depends(get_moment_store),
):
    """Get an episode by its show number"""
    episode = await store.get_episode_by_number(number)
    if not episode:
        raise HTTPException(status_code=404, detail="Episode not found")
    return await _detail(episode, store, moments)


@router.get("/{episode_id}", response_model=EpisodeDetailResponse)
async def get_episode(
    episode_id: UUID,
    store: EpisodeStore = Depends(get_episode_store),
    moments: MomentStore = Depends(get_moment_store),
):
    """
    Get a specific episode by ID.

    Returns:
        Episode details including transcript, comedians, moments and rating
    """
    episode = await store.get_episode(episode_id)
    if not episode:
        raise HTTPException(status_code=404, detail="Episode not found")
    return await _detail(episode, store, moments)
