"""Moment (bit) model"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base, utcnow

MOMENT_CATEGORIES = ("bomb", "roast", "comeback", "sound-effect", "musical-burn", "other")


class Moment(Base):
    """Fan-curated timestamped bit within an episode"""

    __tablename__ = "moments"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    episode_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    timestamp: Mapped[str] = mapped_column(String(8), nullable=False)
    title: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False, default="other", index=True)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    user_name: Mapped[str] = mapped_column(String(200), nullable=False, default="Anonymous")
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    upvoted_by: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "episode_id": str(self.episode_id),
            "timestamp": self.timestamp,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags or []),
            "user_id": self.user_id,
            "user_name": self.user_name,
            "upvotes": self.upvotes,
            "upvoted_by": list(self.upvoted_by or []),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
