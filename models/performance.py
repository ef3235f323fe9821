"""Performance model"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base, utcnow


class Performance(Base):
    """A single comedian appearance within an episode"""

    __tablename__ = "performances"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    comedian_key: Mapped[str] = mapped_column(
        String(150),
        ForeignKey("comedians.key", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    episode_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("episodes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_time: Mapped[str] = mapped_column(String(8), nullable=False)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "comedian_key": self.comedian_key,
            "episode_id": str(self.episode_id),
            "start_time": self.start_time,
            "tags": list(self.tags or []),
        }
