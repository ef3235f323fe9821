"""Storage layer for fan contributions: reviews and moments"""

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.moment import Moment
from models.review import Review


def toggle_vote(voters: list[str], user_id: str) -> tuple[list[str], bool]:
    """
    Add or remove a voter.

    Returns:
        New voter list and whether the user is now upvoting
    """
    if user_id in voters:
        return [voter for voter in voters if voter != user_id], False
    return [*voters, user_id], True


class ReviewStore:
    """Data access for reviews and threaded replies."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_review(self, review_id: UUID, for_update: bool = False) -> Review | None:
        query = select(Review).where(Review.id == review_id)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def create_review(self, **fields) -> Review:
        """Insert a review; a reply is also appended to its parent's reply list."""
        review = Review(**fields)
        self.session.add(review)
        await self.session.flush()

        if review.parent_id is not None:
            parent = await self.get_review(review.parent_id, for_update=True)
            if parent is not None:
                parent.replies = [*(parent.replies or []), str(review.id)]

        await self.session.commit()
        return review

    async def toggle_upvote(self, review: Review, user_id: str) -> bool:
        voters, upvoted = toggle_vote(list(review.upvoted_by or []), user_id)
        review.upvoted_by = voters
        review.upvotes = len(voters)
        await self.session.commit()
        return upvoted

    async def list_reviews(
        self,
        episode_id: UUID | None = None,
        comedian_key: str | None = None,
    ) -> list[Review]:
        """Reviews for a target, most upvoted first, then newest."""
        query = select(Review)
        if episode_id is not None:
            query = query.where(Review.episode_id == episode_id)
        if comedian_key is not None:
            query = query.where(Review.comedian_key == comedian_key)

        result = await self.session.execute(
            query.order_by(Review.upvotes.desc(), Review.created_at.desc())
        )
        return list(result.scalars().all())


class MomentStore:
    """Data access for fan-submitted moments (bits)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_moment(self, moment_id: UUID, for_update: bool = False) -> Moment | None:
        query = select(Moment).where(Moment.id == moment_id)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def create_moment(self, **fields) -> Moment:
        moment = Moment(**fields)
        self.session.add(moment)
        await self.session.commit()
        return moment

    async def toggle_upvote(self, moment: Moment, user_id: str) -> bool:
        voters, upvoted = toggle_vote(list(moment.upvoted_by or []), user_id)
        moment.upvoted_by = voters
        moment.upvotes = len(voters)
        await self.session.commit()
        return upvoted

    async def list_moments(
        self,
        episode_id: UUID | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> list[Moment]:
        """
        List moments, most upvoted first.

        Args:
            episode_id: Restrict to one episode
            category: Restrict to one category
            search: Case-insensitive match on title or description
        """
        query = select(Moment)
        if episode_id is not None:
            query = query.where(Moment.episode_id == episode_id)
        if category:
            query = query.where(Moment.category == category)
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(Moment.title.ilike(pattern), Moment.description.ilike(pattern)))

        result = await self.session.execute(
            query.order_by(Moment.upvotes.desc(), Moment.created_at.desc())
        )
        return list(result.scalars().all())
