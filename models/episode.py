"""Episode model"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base, utcnow


class Episode(Base):
    """One published show with its transcript and generated recap"""

    __tablename__ = "episodes"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    video_id: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    number: Mapped[int] = mapped_column(Integer, unique=True, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), index=True)
    thumbnail: Mapped[str | None] = mapped_column(String)
    # Ordered [{"text": str, "start": float}]
    transcript: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    highlights: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    # Curated [{"name": str, "start_time": str, "tags": [str]}]
    comics: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def to_dict(self) -> dict:
        """Convert Episode to dictionary."""
        return {
            "id": str(self.id) if self.id else None,
            "video_id": self.video_id,
            "number": self.number,
            "title": self.title,
            "description": self.description,
            "published_at": self.published_at.isoformat() if self.published_at else None,
            "thumbnail": self.thumbnail,
            "summary": self.summary,
            "highlights": list(self.highlights or []),
            "comics": list(self.comics or []),
            "tags": list(self.tags or []),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
