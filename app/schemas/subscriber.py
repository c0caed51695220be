from pydantic import field_validator
from typing import Any, Optional
from datetime import datetime
import json
import uuid

from app.schemas.base import CamelModel


class SubscribeRequest(CamelModel):
    waitlist_id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    company: Optional[str] = None
    custom_data: Optional[Any] = None


class SubscribeResponse(CamelModel):
    message: str
    position: int


class Subscriber(CamelModel):
    id: uuid.UUID
    waitlist_id: uuid.UUID
    email: str
    name: Optional[str] = None
    company: Optional[str] = None
    custom_data: Optional[Any] = None
    position: int
    created_at: datetime

    @field_validator("custom_data", mode="before")
    @classmethod
    def parse_custom_data(cls, v):
        if isinstance(v, str):
            try:
                return json.loads(v)
            except ValueError:
                return v
        return v
