"""Comedian profile model"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base, utcnow


class ComedianProfile(Base):
    """Recurring performer aggregated across episodes, keyed by normalized name"""

    __tablename__ = "comedians"

    key: Mapped[str] = mapped_column(String(150), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(String)
    # Social links
    instagram: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    website: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    youtube: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    twitter: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    total_appearances: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    first_appearance: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    last_appearance: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    # Set manually by admins
    golden_ticket: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    regular_guest: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    hall_of_fame: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "bio": self.bio,
            "image_url": self.image_url,
            "social_links": {
                "instagram": self.instagram,
                "website": self.website,
                "youtube": self.youtube,
                "twitter": self.twitter,
            },
            "total_appearances": self.total_appearances,
            "first_appearance": self.first_appearance.isoformat()
            if self.first_appearance
            else None,
            "last_appearance": self.last_appearance.isoformat() if self.last_appearance else None,
            "golden_ticket": self.golden_ticket,
            "regular_guest": self.regular_guest,
            "hall_of_fame": self.hall_of_fame,
        }
