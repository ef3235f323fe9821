"""Dependency injection utilities"""

from collections.abc import AsyncGenerator

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from core.database import get_db
from services.auth import AdminVerifier, AuthenticatedUser, TokenVerifier
from services.comedian_validator import ComedianValidator
from services.episode_ingestion import EpisodeIngestionService
from services.episode_publisher import EpisodePublisher
from services.gemini import GeminiClient
from services.summarizer import EpisodeSummarizer
from services.transcripts import TranscriptFetcher
from services.youtube import YouTubeClient
from storage.community_store import MomentStore, ReviewStore
from storage.episode_store import EpisodeStore
from storage.user_store import UserStore


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database session"""
    async for session in get_db():
        yield session


def get_config() -> Settings:
    """Dependency for getting application config"""
    return get_settings()


def get_episode_store(db: AsyncSession = Depends(get_db_session)) -> EpisodeStore:
    return EpisodeStore(db)


def get_review_store(db: AsyncSession = Depends(get_db_session)) -> ReviewStore:
    return ReviewStore(db)


def get_moment_store(db: AsyncSession = Depends(get_db_session)) -> MomentStore:
    return MomentStore(db)


def get_user_store(db: AsyncSession = Depends(get_db_session)) -> UserStore:
    return UserStore(db)


def get_gemini_client() -> GeminiClient:
    """Dependency for getting Gemini client"""
    settings = get_settings()
    return GeminiClient(api_key=settings.google_api_key, model=settings.gemini_model)


def get_youtube_client() -> YouTubeClient:
    """Dependency for the YouTube Data API client"""
    settings = get_settings()
    return YouTubeClient(
        api_key=settings.youtube_api_key,
        base_url=settings.youtube_api_base_url,
        channel_id=settings.youtube_channel_id,
        timeout=settings.youtube_timeout_seconds,
    )


def get_transcript_fetcher() -> TranscriptFetcher:
    return TranscriptFetcher()


def get_ingestion_service(
    youtube_client: YouTubeClient = Depends(get_youtube_client),
    transcript_fetcher: TranscriptFetcher = Depends(get_transcript_fetcher),
    gemini_client: GeminiClient = Depends(get_gemini_client),
) -> EpisodeIngestionService:
    """Dependency for the draft-building ingestion pipeline"""
    settings = get_settings()
    summarizer = EpisodeSummarizer(
        gemini_client,
        chunk_count=settings.summary_chunk_count,
        chunk_max_tokens=settings.summary_max_tokens,
        recap_max_tokens=settings.recap_max_tokens,
        highlights_max_tokens=settings.highlights_max_tokens,
    )
    validator = ComedianValidator(
        gemini_client,
        batch_size=settings.validation_batch_size,
        temperature=settings.validation_temperature,
        max_output_tokens=settings.validation_max_tokens,
    )
    return EpisodeIngestionService(
        youtube_client=youtube_client,
        transcript_fetcher=transcript_fetcher,
        summarizer=summarizer,
        validator=validator,
    )


def get_episode_publisher(
    store: EpisodeStore = Depends(get_episode_store),
) -> EpisodePublisher:
    return EpisodePublisher(store)


def get_token_verifier() -> TokenVerifier:
    settings = get_settings()
    return TokenVerifier(
        secret_key=settings.auth_secret_key,
        algorithm=settings.auth_algorithm,
        audience=settings.auth_audience,
    )


def get_admin_verifier(
    token_verifier: TokenVerifier = Depends(get_token_verifier),
    user_store: UserStore = Depends(get_user_store),
) -> AdminVerifier:
    return AdminVerifier(token_verifier=token_verifier, user_store=user_store)


async def require_admin(
    authorization: str | None = Header(default=None),
    verifier: AdminVerifier = Depends(get_admin_verifier),
) -> AuthenticatedUser:
    """Dependency that rejects callers without an admin bearer token"""
    return await verifier.require_admin(authorization)
