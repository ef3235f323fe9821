"""Test admin ingestion endpoints."""

from httpx import AsyncClient

from app.dependencies import get_ingestion_service, get_youtube_client
from app.main import app
from core.exceptions import EpisodeNumberError
from models.user import Admin
from services.comedian_validator import ComicInfo
from services.episode_ingestion import EpisodeDraft
from services.transcripts import TranscriptEntry
from services.youtube import VideoMetadata


class DummyIngestion:
    """Stub pipeline returning a fixed draft."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.videos: list[str] = []
        self.stage_timings_ms: dict[str, float] = {}

    async def build_draft(self, video: str) -> EpisodeDraft:
        self.videos.append(video)
        if self.error:
            raise self.error
        return EpisodeDraft(
            video_id="abc123XYZ_-",
            title="KILL TONY #619",
            description="Live from Austin",
            published_at="2023-05-01T00:00:00Z",
            number=619,
            thumbnail="https://img/max.jpg",
            transcript=[TranscriptEntry(text="please welcome Hans Kim", start=754.0)],
            episode_summary="Hans Kim closed the show.",
            highlights=["Hans Kim closed the show"],
            comics=[ComicInfo(name="Hans Kim", start_time="12:34")],
        )


class DummyYouTube:
    async def search_videos(self, query: str = "", max_results: int = 10) -> list[VideoMetadata]:
        return [
            VideoMetadata(
                video_id="vid1",
                title=f"KILL TONY #700 {query}".strip(),
                description="",
                published_at="2024-02-01T00:00:00Z",
                thumbnails={"high": {"url": "https://img/high.jpg"}},
            )
        ][:max_results]


CURATED = {
    "video_id": "abc123XYZ_-",
    "number": 619,
    "title": "KILL TONY #619",
    "description": "Live from Austin",
    "published_at": "2023-05-01T00:00:00Z",
    "thumbnail": "https://img/max.jpg",
    "transcript": [{"text": "please welcome Hans Kim", "start": 754.0}],
    "episode_summary": "Hans Kim closed the show.",
    "highlights": ["Hans Kim closed the show"],
    "comics": [{"name": "Hans Kim", "start_time": "12:34", "tags": ["regular"]}],
}


class TestAdminAuth:
    """Admin gate on every endpoint."""

    async def test_missing_token_unauthorized(self, client: AsyncClient):
        response = await client.post("/api/admin/process-video", json={"videoId": "abc123XYZ_-"})

        assert response.status_code == 401

    async def test_invalid_token_unauthorized(self, client: AsyncClient):
        response = await client.post(
            "/api/admin/process-video",
            json={"videoId": "abc123XYZ_-"},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401

    async def test_non_admin_forbidden(self, client: AsyncClient, make_token):
        response = await client.post(
            "/api/admin/create-episode",
            json=CURATED,
            headers={"Authorization": make_token("fan-1")},
        )

        assert response.status_code == 403

    async def test_admins_table_grants_access(self, client: AsyncClient, db_session, make_token):
        db_session.add(Admin(uid="listed-admin"))
        await db_session.commit()
        app.dependency_overrides[get_youtube_client] = DummyYouTube

        response = await client.get(
            "/api/admin/videos/search", headers={"Authorization": make_token("listed-admin")}
        )

        assert response.status_code == 200


class TestProcessVideo:
    async def test_returns_draft(self, client: AsyncClient, admin_headers):
        ingestion = DummyIngestion()
        app.dependency_overrides[get_ingestion_service] = lambda: ingestion

        response = await client.post(
            "/api/admin/process-video",
            json={"videoId": "https://www.youtube.com/watch?v=abc123XYZ_-"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["number"] == 619
        assert data["comics"] == [{"name": "Hans Kim", "start_time": "12:34", "tags": []}]
        assert data["name_candidates"] == ["Hans Kim"]
        assert ingestion.videos == ["https://www.youtube.com/watch?v=abc123XYZ_-"]

    async def test_pipeline_error_status(self, client: AsyncClient, admin_headers):
        ingestion = DummyIngestion(error=EpisodeNumberError("Could not determine episode number"))
        app.dependency_overrides[get_ingestion_service] = lambda: ingestion

        response = await client.post(
            "/api/admin/process-video", json={"videoId": "abc123XYZ_-"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert "episode number" in response.json()["detail"]


class TestCreateEpisode:
    async def test_create_episode_links_comedians(self, client: AsyncClient, admin_headers):
        response = await client.post("/api/admin/create-episode", json=CURATED, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["success"] is True

        comedian = await client.get("/api/comedians/hans-kim")
        assert comedian.status_code == 200
        assert comedian.json()["total_appearances"] == 1
        assert comedian.json()["performances"][0]["tags"] == ["regular"]

        episode = await client.get("/api/episodes/number/619")
        assert episode.json()["summary"] == "Hans Kim closed the show."

    async def test_duplicate_episode_conflict(self, client: AsyncClient, admin_headers):
        first = await client.post("/api/admin/create-episode", json=CURATED, headers=admin_headers)
        second = await client.post("/api/admin/create-episode", json=CURATED, headers=admin_headers)

        assert first.status_code == 201
        assert second.status_code == 409

    async def test_second_episode_increments_appearances(self, client: AsyncClient, admin_headers):
        await client.post("/api/admin/create-episode", json=CURATED, headers=admin_headers)
        await client.post(
            "/api/admin/create-episode",
            json={**CURATED, "video_id": "def456XYZ_-", "number": 620, "title": "KILL TONY #620"},
            headers=admin_headers,
        )

        comedian = await client.get("/api/comedians/hans-kim")

        assert comedian.json()["total_appearances"] == 2
        assert [p["episode_number"] for p in comedian.json()["performances"]] == [620, 619]

    async def test_invalid_comic_start_time_rejected(self, client: AsyncClient, admin_headers):
        payload = {**CURATED, "comics": [{"name": "Hans Kim", "start_time": "around 99:99 maybe"}]}

        response = await client.post("/api/admin/create-episode", json=payload, headers=admin_headers)

        assert response.status_code == 422
        assert "Invalid format" in response.json()["detail"]
        assert (await client.get("/api/episodes/number/619")).status_code == 404
        assert (await client.get("/api/comedians/hans-kim")).status_code == 404

    async def test_comic_start_time_stored_normalized(self, client: AsyncClient, admin_headers):
        payload = {**CURATED, "comics": [{"name": "Hans Kim", "start_time": "1:2:3"}]}

        response = await client.post("/api/admin/create-episode", json=payload, headers=admin_headers)
        assert response.status_code == 201

        comedian = await client.get("/api/comedians/hans-kim")
        assert comedian.json()["performances"][0]["start_time"] == "01:02:03"


class TestAdminUtilities:
    async def test_set_admin_claim(self, client: AsyncClient, admin_headers, make_token):
        response = await client.post(
            "/api/admin/set-admin-claim", json={"userId": "new-admin"}, headers=admin_headers
        )
        assert response.status_code == 200

        app.dependency_overrides[get_youtube_client] = DummyYouTube
        promoted = await client.get(
            "/api/admin/videos/search", headers={"Authorization": make_token("new-admin")}
        )
        assert promoted.status_code == 200

    async def test_search_videos(self, client: AsyncClient, admin_headers):
        app.dependency_overrides[get_youtube_client] = DummyYouTube

        response = await client.get(
            "/api/admin/videos/search", params={"q": "bucket"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json() == [
            {
                "video_id": "vid1",
                "title": "KILL TONY #700 bucket",
                "description": "",
                "published_at": "2024-02-01T00:00:00Z",
                "thumbnail": "https://img/high.jpg",
            }
        ]
