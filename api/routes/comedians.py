"""Comedian directory API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, Query

from api.converters import performance_response, review_response
from api.schemas import ComedianDetailResponse, ComedianResponse
from app.config import Settings
from app.dependencies import get_config, get_episode_store, get_review_store
from models.comedian import ComedianProfile
from services.comedian_directory import FILTER_OPTIONS, SORT_OPTIONS, filter_comedians, sort_comedians
from storage.community_store import ReviewStore
from storage.episode_store import EpisodeStore

router = APIRouter(prefix="/api/comedians", tags=["Comedians"])


def _response(
    profile: ComedianProfile, rating: tuple[float | None, int] = (None, 0)
) -> ComedianResponse:
    return ComedianResponse(**profile.to_dict(), average_rating=rating[0], review_count=rating[1])


@router.get("/", response_model=list[ComedianResponse])
async def list_comedians(
    store: EpisodeStore = Depends(get_episode_store),
    settings: Settings = Depends(get_config),
    filter: str = Query("all", description=f"One of {', '.join(FILTER_OPTIONS)}"),
    search: str | None = Query(None, description="Name or bio search, tolerant of typos"),
    sort_by: str = Query("appearances", description=f"One of {', '.join(SORT_OPTIONS)}"),
):
    """
    List comedians with status filter, fuzzy search and ordering.

    Returns:
        Matching comedian profiles
    """
    if filter not in FILTER_OPTIONS:
        raise HTTPException(status_code=400, detail=f"Invalid filter: {filter}")
    if sort_by not in SORT_OPTIONS:
        raise HTTPException(status_code=400, detail=f"Invalid sort_by: {sort_by}")

    profiles = await store.list_comedians()
    ratings = await store.comedian_rating_summaries()
    selected = filter_comedians(
        profiles, category=filter, query=search, threshold=settings.fuzzy_match_threshold
    )
    ordered = sort_comedians(selected, sort_by, ratings)
    return [_response(profile, ratings.get(profile.key, (None, 0))) for profile in ordered]


@router.get("/hall-of-fame", response_model=list[ComedianResponse])
async def hall_of_fame(store: EpisodeStore = Depends(get_episode_store)):
    """Hall of Fame members"""
    profiles = await store.list_comedians(hall_of_fame=True)
    return [_response(profile) for profile in profiles]


@router.get("/golden-tickets", response_model=list[ComedianResponse])
async def golden_tickets(store: EpisodeStore = Depends(get_episode_store)):
    """Golden Ticket winners"""
    profiles = await store.list_comedians(golden_ticket=True)
    return [_response(profile) for profile in profiles]


@router.get("/{key}", response_model=ComedianDetailResponse)
async def get_comedian(
    key: str,
    store: EpisodeStore = Depends(get_episode_store),
    reviews: ReviewStore = Depends(get_review_store),
):
    """
    Get a comedian profile by key.

    Returns:
        Profile with performances (latest episode first) and reviews
    """
    profile = await store.get_comedian(key)
    if not profile:
        raise HTTPException(status_code=404, detail="Comedian not found")

    performances = await store.list_comedian_performances(key)
    rating = await store.rating_summary(comedian_key=key)
    comedian_reviews = await reviews.list_reviews(comedian_key=key)

    return ComedianDetailResponse(
        **_response(profile, rating).model_dump(),
        performances=[
            performance_response(performance, episode, comedian_name=profile.name)
            for performance, episode in performances
        ],
        reviews=[review_response(review) for review in comedian_reviews],
    )
