"""Moment (bit) API endpoints"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from api.converters import moment_response
from api.schemas import MomentCreate, MomentResponse, SubmitResponse, UpvoteRequest, UpvoteResponse
from app.dependencies import get_episode_store, get_moment_store
from core.utils import validate_and_normalize_timestamp
from storage.community_store import MomentStore
from storage.episode_store import EpisodeStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/moments", tags=["Moments"])


@router.post("/", response_model=SubmitResponse, status_code=201)
async def submit_moment(
    moment: MomentCreate,
    moments: MomentStore = Depends(get_moment_store),
    episodes: EpisodeStore = Depends(get_episode_store),
):
    """
    Submit a bit at a timestamp within an episode.

    Returns:
        Created moment ID
    """
    timestamp = validate_and_normalize_timestamp(moment.timestamp)
    if not timestamp.valid:
        raise HTTPException(status_code=422, detail=timestamp.error)

    if not await episodes.get_episode(moment.episode_id):
        raise HTTPException(status_code=404, detail="Episode not found")

    fields = moment.model_dump()
    fields["timestamp"] = timestamp.normalized
    created = await moments.create_moment(**fields)
    logger.info(f"Moment {created.id} submitted by {moment.user_id}")
    return SubmitResponse(id=created.id)


@router.post("/upvote", response_model=UpvoteResponse)
async def upvote_moment(
    request: UpvoteRequest,
    moments: MomentStore = Depends(get_moment_store),
):
    """Toggle the caller's upvote on a moment"""
    moment = await moments.get_moment(request.target_id, for_update=True)
    if not moment:
        raise HTTPException(status_code=404, detail="Moment not found")

    has_upvoted = await moments.toggle_upvote(moment, request.user_id)
    return UpvoteResponse(upvotes=moment.upvotes, has_upvoted=has_upvoted)


@router.get("/", response_model=list[MomentResponse])
async def list_moments(
    episode_id: UUID | None = Query(None),
    category: str | None = Query(None),
    search: str | None = Query(None),
    moments: MomentStore = Depends(get_moment_store),
):
    """List moments, optionally by episode, category or text search"""
    found = await moments.list_moments(episode_id=episode_id, category=category, search=search)
    return [moment_response(moment) for moment in found]
