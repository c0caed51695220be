# Import all models here for Alembic
from app.models.user import User
from app.models.waitlist import Waitlist
from app.models.subscriber import Subscriber

__all__ = [
    "User",
    "Waitlist",
    "Subscriber",
]
