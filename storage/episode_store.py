"""Episode and comedian storage layer"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import utcnow
from core.exceptions import DuplicateEpisodeError
from models.comedian import ComedianProfile
from models.episode import Episode
from models.performance import Performance
from models.review import Review


class EpisodeStore:
    """Data access for episodes, comedian profiles and performances."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    # Episodes

    async def get_episode(self, episode_id: UUID) -> Episode | None:
        return await self.session.get(Episode, episode_id)

    async def get_episode_by_number(self, number: int) -> Episode | None:
        result = await self.session.execute(select(Episode).where(Episode.number == number))
        return result.scalar_one_or_none()

    async def episode_exists(self, number: int, video_id: str) -> bool:
        """Check whether an episode with this number or video is already stored."""
        result = await self.session.execute(
            select(Episode.id).where(or_(Episode.number == number, Episode.video_id == video_id))
        )
        return result.first() is not None

    async def list_episodes(
        self,
        page: int = 1,
        per_page: int = 20,
        search: str | None = None,
    ) -> list[Episode]:
        """
        List episodes newest number first.

        Args:
            page: Page number (1-indexed)
            per_page: Items per page
            search: Case-insensitive match on title or description
        """
        query = select(Episode)
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(Episode.title.ilike(pattern), Episode.description.ilike(pattern)))

        query = query.order_by(Episode.number.desc()).limit(per_page).offset((page - 1) * per_page)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def create_episode(self, **fields) -> Episode:
        """
        Insert and commit a new episode.

        Raises:
            DuplicateEpisodeError: Number or video id taken by another row
        """
        episode = Episode(**fields)
        self.session.add(episode)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise DuplicateEpisodeError(
                f"Episode #{fields.get('number')} ({fields.get('video_id')}) already exists"
            ) from e
        return episode

    # Comedians

    def _upsert_insert(self):
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert
        if dialect == "sqlite":
            return sqlite.insert
        raise NotImplementedError(f"Atomic upsert not supported for dialect {dialect}")

    async def record_appearance(self, key: str, name: str, appeared_at: datetime | None) -> None:
        """
        Create the profile with one appearance, or increment an existing one.

        A single INSERT .. ON CONFLICT statement so concurrent ingestions
        cannot lose increments.
        """
        insert = self._upsert_insert()
        stmt = insert(ComedianProfile).values(
            key=key,
            name=name,
            total_appearances=1,
            first_appearance=appeared_at,
            last_appearance=appeared_at,
            created_at=utcnow(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ComedianProfile.key],
            set_={
                "total_appearances": ComedianProfile.total_appearances + 1,
                "last_appearance": stmt.excluded.last_appearance,
            },
        )
        await self.session.execute(stmt)

    async def add_performance(
        self,
        comedian_key: str,
        episode_id: UUID,
        start_time: str,
        tags: list[str],
    ) -> Performance:
        performance = Performance(
            comedian_key=comedian_key,
            episode_id=episode_id,
            start_time=start_time,
            tags=list(tags),
        )
        self.session.add(performance)
        await self.session.flush()
        return performance

    async def get_comedian(self, key: str) -> ComedianProfile | None:
        # populate_existing picks up counters changed by the upsert statement
        result = await self.session.execute(
            select(ComedianProfile)
            .where(ComedianProfile.key == key)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_comedians(
        self,
        golden_ticket: bool | None = None,
        regular_guest: bool | None = None,
        hall_of_fame: bool | None = None,
    ) -> list[ComedianProfile]:
        """List comedians by appearances, optionally filtered by status flags."""
        query = select(ComedianProfile).execution_options(populate_existing=True)
        if golden_ticket is not None:
            query = query.where(ComedianProfile.golden_ticket == golden_ticket)
        if regular_guest is not None:
            query = query.where(ComedianProfile.regular_guest == regular_guest)
        if hall_of_fame is not None:
            query = query.where(ComedianProfile.hall_of_fame == hall_of_fame)

        query = query.order_by(ComedianProfile.total_appearances.desc(), ComedianProfile.name)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    # Performances

    async def list_comedian_performances(self, key: str) -> list[tuple[Performance, Episode]]:
        """Performances of a comedian with their episodes, latest episode first."""
        result = await self.session.execute(
            select(Performance, Episode)
            .join(Episode, Episode.id == Performance.episode_id)
            .where(Performance.comedian_key == key)
            .order_by(Episode.number.desc())
        )
        return [(row[0], row[1]) for row in result.all()]

    async def list_episode_performances(self, episode_id: UUID) -> list[Performance]:
        result = await self.session.execute(
            select(Performance).where(Performance.episode_id == episode_id)
        )
        return list(result.scalars().all())

    async def count_performances(self, key: str) -> int:
        result = await self.session.execute(
            select(func.count(Performance.id)).where(Performance.comedian_key == key)
        )
        return int(result.scalar_one())

    # Ratings

    async def rating_summary(
        self,
        episode_id: UUID | None = None,
        comedian_key: str | None = None,
    ) -> tuple[float | None, int]:
        """Average rating and count of top-level reviews for one target."""
        query = select(func.avg(Review.rating), func.count(Review.id)).where(
            Review.parent_id.is_(None), Review.rating.is_not(None)
        )
        if episode_id is not None:
            query = query.where(Review.episode_id == episode_id)
        if comedian_key is not None:
            query = query.where(Review.comedian_key == comedian_key)

        result = await self.session.execute(query)
        average, count = result.one()
        return (float(average) if average is not None else None, int(count))

    async def comedian_rating_summaries(self) -> dict[str, tuple[float | None, int]]:
        """Rating average and count for every reviewed comedian."""
        result = await self.session.execute(
            select(Review.comedian_key, func.avg(Review.rating), func.count(Review.id))
            .where(
                Review.comedian_key.is_not(None),
                Review.parent_id.is_(None),
                Review.rating.is_not(None),
            )
            .group_by(Review.comedian_key)
        )
        return {
            key: (float(average) if average is not None else None, int(count))
            for key, average, count in result.all()
        }
