"""Review API endpoints"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from api.converters import review_response
from api.schemas import ReviewCreate, ReviewResponse, SubmitResponse, UpvoteRequest, UpvoteResponse
from app.dependencies import get_episode_store, get_review_store
from storage.community_store import ReviewStore
from storage.episode_store import EpisodeStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


@router.post("/submit", response_model=SubmitResponse, status_code=201)
async def submit_review(
    review: ReviewCreate,
    reviews: ReviewStore = Depends(get_review_store),
    episodes: EpisodeStore = Depends(get_episode_store),
):
    """
    Submit a review of an episode or comedian, or a reply to another review.

    Returns:
        Created review ID
    """
    if review.episode_id is None and review.comedian_key is None:
        raise HTTPException(status_code=400, detail="episode_id or comedian_key is required")
    if review.parent_id is None and review.rating is None:
        raise HTTPException(status_code=422, detail="rating is required for a review")

    if review.episode_id is not None and not await episodes.get_episode(review.episode_id):
        raise HTTPException(status_code=404, detail="Episode not found")
    if review.comedian_key is not None and not await episodes.get_comedian(review.comedian_key):
        raise HTTPException(status_code=404, detail="Comedian not found")
    if review.parent_id is not None and not await reviews.get_review(review.parent_id):
        raise HTTPException(status_code=404, detail="Parent review not found")

    created = await reviews.create_review(**review.model_dump())
    logger.info(f"Review {created.id} submitted by {review.user_id}")
    return SubmitResponse(id=created.id)


@router.post("/upvote", response_model=UpvoteResponse)
async def upvote_review(
    request: UpvoteRequest,
    reviews: ReviewStore = Depends(get_review_store),
):
    """Toggle the caller's upvote on a review"""
    review = await reviews.get_review(request.target_id, for_update=True)
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")

    has_upvoted = await reviews.toggle_upvote(review, request.user_id)
    return UpvoteResponse(upvotes=review.upvotes, has_upvoted=has_upvoted)


@router.get("/", response_model=list[ReviewResponse])
async def list_reviews(
    episode_id: UUID | None = Query(None),
    comedian_key: str | None = Query(None),
    reviews: ReviewStore = Depends(get_review_store),
):
    """List reviews for an episode or comedian"""
    if episode_id is None and comedian_key is None:
        raise HTTPException(status_code=400, detail="episode_id or comedian_key is required")

    found = await reviews.list_reviews(episode_id=episode_id, comedian_key=comedian_key)
    return [review_response(review) for review in found]
