from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.database import get_db
from app.core.deps import get_current_active_user
from app.core.exceptions import ValidationError
from app.models.user import User
from app.models.waitlist import Waitlist
from app.schemas.subscriber import Subscriber as SubscriberSchema
from app.schemas.waitlist import (
    MessageResponse,
    ShareOptions,
    SlugCheckResponse,
    SlugSuggestionResponse,
    Waitlist as WaitlistSchema,
    WaitlistCreate,
    WaitlistUpdate,
)
from app.services.export_service import subscribers_to_csv
from app.services.share_service import build_share_options
from app.services.slug_service import check_slug_availability, generate_slug
from app.services.waitlist_service import WaitlistService

router = APIRouter()


def _with_count(waitlist: Waitlist, count: int) -> WaitlistSchema:
    data = WaitlistSchema.model_validate(waitlist)
    data.subscriber_count = count
    return data


@router.get("", response_model=List[WaitlistSchema])
async def list_waitlists(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """All waitlists of the current user, newest first."""
    rows = WaitlistService(db).list_for_user(current_user)
    return [_with_count(w, count) for w, count in rows]


@router.post("", response_model=WaitlistSchema, status_code=status.HTTP_201_CREATED)
async def create_waitlist(
    waitlist_create: WaitlistCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    waitlist = WaitlistService(db).create(current_user, waitlist_create)
    return _with_count(waitlist, 0)


# Declared before /{waitlist_id} so the literal paths win
@router.get("/check-slug", response_model=SlugCheckResponse, response_model_exclude_none=True)
async def check_slug(
    slug: Optional[str] = None,
    exclude_id: Optional[str] = Query(None, alias="excludeId"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Live availability check used while the owner edits the URL."""
    if not slug:
        raise ValidationError("Slug requis")
    check = check_slug_availability(db, slug, exclude_id)
    return SlugCheckResponse(available=check.available, reason=check.reason, message=check.message)


@router.get("/suggest-slug", response_model=SlugSuggestionResponse, response_model_exclude_none=True)
async def suggest_slug(
    title: Optional[str] = None,
    exclude_id: Optional[str] = Query(None, alias="excludeId"),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Slug derived from a title, with its availability."""
    if not title:
        raise ValidationError("Titre requis")
    slug = generate_slug(title)
    check = check_slug_availability(db, slug, exclude_id)
    return SlugSuggestionResponse(
        slug=slug, available=check.available, reason=check.reason, message=check.message
    )


@router.get("/{waitlist_id}", response_model=WaitlistSchema)
async def get_waitlist(
    waitlist_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    service = WaitlistService(db)
    waitlist = service.get_owned(current_user, waitlist_id)
    return _with_count(waitlist, service.subscriber_count(waitlist.id))


@router.put("/{waitlist_id}", response_model=WaitlistSchema)
async def update_waitlist(
    waitlist_id: str,
    waitlist_update: WaitlistUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    service = WaitlistService(db)
    waitlist = service.update(current_user, waitlist_id, waitlist_update)
    return _with_count(waitlist, service.subscriber_count(waitlist.id))


@router.delete("/{waitlist_id}", response_model=MessageResponse)
async def delete_waitlist(
    waitlist_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Delete a waitlist together with its subscribers"""
    WaitlistService(db).delete(current_user, waitlist_id)
    return MessageResponse(message="Waitlist supprimée")


@router.get("/{waitlist_id}/subscribers", response_model=List[SubscriberSchema])
async def list_subscribers(
    waitlist_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Subscribers in arrival order."""
    return WaitlistService(db).list_subscribers(current_user, waitlist_id)


@router.get("/{waitlist_id}/subscribers/export")
async def export_subscribers(
    waitlist_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    """Download subscribers as CSV"""
    subscribers = WaitlistService(db).list_subscribers(current_user, waitlist_id)
    return Response(
        content=subscribers_to_csv(subscribers),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="subscribers-{waitlist_id}.csv"'},
    )


@router.get("/{waitlist_id}/share", response_model=ShareOptions)
async def share_waitlist(
    waitlist_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db)
):
    waitlist = WaitlistService(db).get_owned(current_user, waitlist_id)
    return ShareOptions(**build_share_options(waitlist.slug, str(waitlist.id)))
