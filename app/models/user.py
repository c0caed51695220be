from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid

from app.core.database import Base
from app.core.types import GUID


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    email = Column(String(320), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    name = Column(String(120), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps (set in Python so ordering keeps sub-second precision on SQLite)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    # Relationships
    waitlists = relationship("Waitlist", back_populates="user", cascade="all, delete-orphan")
