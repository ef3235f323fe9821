"""Import all models"""

from core.database import Base
from models.comedian import ComedianProfile
from models.episode import Episode
from models.moment import Moment
from models.performance import Performance
from models.review import Review
from models.user import Admin, User

__all__ = [
    "Base",
    "Episode",
    "ComedianProfile",
    "Performance",
    "Review",
    "Moment",
    "User",
    "Admin",
]
