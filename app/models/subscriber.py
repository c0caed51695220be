from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from app.core.database import Base
from app.core.types import GUID
from app.models.user import utcnow


class Subscriber(Base):
    __tablename__ = "subscribers"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    waitlist_id = Column(GUID(), ForeignKey("waitlists.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String(320), nullable=False)
    name = Column(String(200), nullable=True)
    company = Column(String(200), nullable=True)
    custom_data = Column(Text, nullable=True)  # JSON-serialized
    position = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    waitlist = relationship("Waitlist", back_populates="subscribers")

    __table_args__ = (
        UniqueConstraint('waitlist_id', 'email', name='uq_subscriber_waitlist_email'),
        UniqueConstraint('waitlist_id', 'position', name='uq_subscriber_waitlist_position'),
    )
