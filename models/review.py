"""Review model"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base, utcnow


class Review(Base):
    """User review of an episode or a comedian; replies thread through parent_id"""

    __tablename__ = "reviews"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    episode_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("episodes.id", ondelete="CASCADE"), index=True
    )
    comedian_key: Mapped[str | None] = mapped_column(
        String(150), ForeignKey("comedians.key", ondelete="CASCADE"), index=True
    )
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    user_name: Mapped[str] = mapped_column(String(200), nullable=False, default="Anonymous")
    rating: Mapped[int | None] = mapped_column(Integer)
    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")
    parent_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("reviews.id", ondelete="CASCADE"), index=True
    )
    replies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    upvoted_by: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "episode_id": str(self.episode_id) if self.episode_id else None,
            "comedian_key": self.comedian_key,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "rating": self.rating,
            "comment": self.comment,
            "parent_id": str(self.parent_id) if self.parent_id else None,
            "replies": list(self.replies or []),
            "upvotes": self.upvotes,
            "upvoted_by": list(self.upvoted_by or []),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
