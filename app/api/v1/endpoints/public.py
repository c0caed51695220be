from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from dataclasses import asdict
from datetime import datetime, timezone
from typing import List

from app.core.database import get_db
from app.models.waitlist import Waitlist
from app.schemas.waitlist import Theme, WaitlistPublic, WaitlistView
from app.services.countdown import remaining
from app.services.logo import logo_payload, parse_logo
from app.services.share_service import public_url
from app.services.theme_service import get_theme, list_themes
from app.services.waitlist_service import WaitlistService

router = APIRouter(prefix="/public", tags=["public"])
themes_router = APIRouter(tags=["themes"])


def _public(waitlist: Waitlist, count: int) -> WaitlistPublic:
    data = WaitlistPublic.model_validate(waitlist)
    data.subscriber_count = count
    return data


@router.get("/waitlists/{slug}", response_model=WaitlistPublic)
async def get_public_waitlist(slug: str, db: Session = Depends(get_db)):
    """Public fields of a waitlist, looked up by slug"""
    service = WaitlistService(db)
    waitlist = service.get_by_slug(slug)
    return _public(waitlist, service.subscriber_count(waitlist.id))


@router.get("/waitlists/{slug}/view", response_model=WaitlistView)
async def get_waitlist_view(slug: str, db: Session = Depends(get_db)):
    """Page view model: public fields plus resolved theme, logo and countdown."""
    service = WaitlistService(db)
    waitlist = service.get_by_slug(slug)

    countdown = None
    if waitlist.countdown_enabled and waitlist.countdown_date:
        countdown = asdict(remaining(datetime.now(timezone.utc), waitlist.countdown_date))

    return WaitlistView(
        waitlist=_public(waitlist, service.subscriber_count(waitlist.id)),
        theme=Theme.model_validate(get_theme(waitlist.theme)),
        logo=logo_payload(parse_logo(waitlist.logo_url)),
        countdown=countdown,
        public_url=public_url(waitlist.slug),
    )


@themes_router.get("/themes", response_model=List[Theme])
async def get_themes():
    return [Theme.model_validate(t) for t in list_themes()]
