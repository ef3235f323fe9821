"""Admin ingestion API endpoints"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from api.schemas import (
    CreateEpisodeRequest,
    CreateEpisodeResponse,
    EpisodeDraftResponse,
    ProcessVideoRequest,
    SetAdminClaimRequest,
    VideoSearchResult,
)
from app.dependencies import (
    get_admin_verifier,
    get_episode_publisher,
    get_ingestion_service,
    get_youtube_client,
    require_admin,
)
from core.exceptions import BucketPullError
from services.auth import AdminVerifier, AuthenticatedUser
from services.episode_ingestion import EpisodeIngestionService
from services.episode_publisher import CuratedComic, CuratedEpisode, EpisodePublisher
from services.youtube import YouTubeClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/process-video", response_model=EpisodeDraftResponse)
async def process_video(
    request: ProcessVideoRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    ingestion: EpisodeIngestionService = Depends(get_ingestion_service),
):
    """
    Draft an episode from a video: metadata, transcript, recap, highlights
    and validated comedians. Nothing is written.

    Args:
        request: Video id or watch URL

    Returns:
        Draft episode for curation
    """
    try:
        draft = await ingestion.build_draft(request.video_id)
    except BucketPullError as exc:
        logger.error(f"process-video failed for {request.video_id}: {exc.message}")
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    logger.info(f"Draft built by {admin.uid} in {ingestion.stage_timings_ms}")
    return draft.to_dict()


@router.post("/create-episode", response_model=CreateEpisodeResponse, status_code=201)
async def create_episode(
    payload: CreateEpisodeRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    publisher: EpisodePublisher = Depends(get_episode_publisher),
):
    """
    Persist a curated episode and link its comedians.

    Returns:
        Created episode ID
    """
    curated = CuratedEpisode(
        video_id=payload.video_id,
        number=payload.number,
        title=payload.title,
        description=payload.description,
        published_at=payload.published_at,
        thumbnail=payload.thumbnail,
        transcript=[entry.model_dump() for entry in payload.transcript],
        episode_summary=payload.episode_summary,
        highlights=payload.highlights,
        comics=[
            CuratedComic(name=comic.name, start_time=comic.start_time, tags=comic.tags)
            for comic in payload.comics
        ],
        tags=payload.tags,
    )

    try:
        episode_id = await publisher.publish(curated)
    except BucketPullError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    logger.info(f"Episode #{payload.number} published by {admin.uid}")
    return CreateEpisodeResponse(episode_id=episode_id)


@router.post("/set-admin-claim")
async def set_admin_claim(
    request: SetAdminClaimRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    verifier: AdminVerifier = Depends(get_admin_verifier),
):
    """Grant admin rights to a user"""
    await verifier.grant_admin(request.user_id)
    return {"success": True}


@router.get("/videos/search", response_model=list[VideoSearchResult])
async def search_videos(
    q: str = Query("", description="Search query; empty lists latest uploads"),
    max_results: int = Query(10, ge=1, le=50),
    admin: AuthenticatedUser = Depends(require_admin),
    youtube: YouTubeClient = Depends(get_youtube_client),
):
    """Search the channel for videos to ingest"""
    try:
        videos = await youtube.search_videos(q, max_results=max_results)
    except BucketPullError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc

    return [
        VideoSearchResult(
            video_id=video.video_id,
            title=video.title,
            description=video.description,
            published_at=video.published_at,
            thumbnail=video.best_thumbnail(),
        )
        for video in videos
    ]
