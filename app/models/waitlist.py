from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
import uuid

from app.core.database import Base
from app.core.types import GUID
from app.models.user import utcnow

DEFAULT_THEME = "dark-modern"
DEFAULT_PRIMARY_COLOR = "#000000"
DEFAULT_BACKGROUND_COLOR = "#ffffff"


class Waitlist(Base):
    __tablename__ = "waitlists"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    user_id = Column(GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    slug = Column(String(50), unique=True, index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    # Page content
    headline = Column(String, nullable=False)
    subheadline = Column(String, nullable=True)

    # Appearance
    theme = Column(String(50), nullable=False, default=DEFAULT_THEME)
    primary_color = Column(String(20), nullable=False, default=DEFAULT_PRIMARY_COLOR)
    background_color = Column(String(20), nullable=False, default=DEFAULT_BACKGROUND_COLOR)
    # "3" selects built-in icon 3, anything else is an uploaded image URL (see app.services.logo)
    logo_url = Column(String, nullable=True)

    # Form fields (email is always collected)
    collect_name = Column(Boolean, nullable=False, default=True)
    collect_company = Column(Boolean, nullable=False, default=False)

    # Countdown; countdown_date stays NULL while countdown_enabled is false
    countdown_enabled = Column(Boolean, nullable=False, default=False)
    countdown_date = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="waitlists")
    subscribers = relationship(
        "Subscriber",
        back_populates="waitlist",
        cascade="all, delete-orphan",
        order_by="Subscriber.position",
    )
