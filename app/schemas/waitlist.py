from pydantic import field_validator
from typing import Any, Dict, Optional, Union
from datetime import datetime
import uuid

from app.schemas.base import CamelModel


class WaitlistBase(CamelModel):
    # Everything is optional at the schema level: the service reports missing
    # slug/title with its own message instead of a generic validation error.
    slug: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    headline: Optional[str] = None
    subheadline: Optional[str] = None
    theme: Optional[str] = None
    primary_color: Optional[str] = None
    background_color: Optional[str] = None
    logo_url: Optional[Union[int, str]] = None
    collect_name: Optional[bool] = None
    collect_company: Optional[bool] = None
    countdown_enabled: Optional[bool] = None
    countdown_date: Optional[datetime] = None

    @field_validator("countdown_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("logo_url", mode="after")
    @classmethod
    def logo_as_string(cls, v):
        # Built-in icons may be sent as a number; storage keeps the flat string
        if isinstance(v, int):
            return str(v)
        return v


class WaitlistCreate(WaitlistBase):
    pass


class WaitlistUpdate(WaitlistBase):
    pass


class Waitlist(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    slug: str
    title: str
    description: Optional[str] = None
    headline: str
    subheadline: Optional[str] = None
    theme: str
    primary_color: str
    background_color: str
    logo_url: Optional[str] = None
    collect_name: bool
    collect_company: bool
    countdown_enabled: bool
    countdown_date: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    subscriber_count: int = 0


class WaitlistPublic(CamelModel):
    """What anyone may read about a waitlist: never the owner."""
    id: uuid.UUID
    slug: str
    title: str
    description: Optional[str] = None
    headline: str
    subheadline: Optional[str] = None
    theme: str
    primary_color: str
    background_color: str
    logo_url: Optional[str] = None
    collect_name: bool
    collect_company: bool
    countdown_enabled: bool
    countdown_date: Optional[datetime] = None
    subscriber_count: int = 0


class SlugCheckResponse(CamelModel):
    available: bool
    reason: Optional[str] = None
    message: str


class SlugSuggestionResponse(SlugCheckResponse):
    slug: str


class Theme(CamelModel):
    id: str
    name: str
    description: str
    background_color: str
    primary_color: str
    text_color: str
    text_secondary_color: str
    accent_color: str
    border_color: str
    input_background: str
    input_border: str
    container_border_color: str
    container_shadow: str


class Countdown(CamelModel):
    days: int
    hours: int
    minutes: int
    seconds: int


class WaitlistView(CamelModel):
    """Everything a page renderer needs to draw the public page."""
    waitlist: WaitlistPublic
    theme: Theme
    logo: Optional[Dict[str, Any]] = None
    countdown: Optional[Countdown] = None
    public_url: str


class ShareOptions(CamelModel):
    public_url: str
    iframe_code: str
    script_code: str


class MessageResponse(CamelModel):
    message: str

