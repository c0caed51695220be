import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, UnexpectedError, ValidationError
from app.models.subscriber import Subscriber
from app.models.user import User, utcnow
from app.models.waitlist import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_THEME,
    Waitlist,
)
from app.schemas.waitlist import WaitlistCreate, WaitlistUpdate
from app.services.countdown import as_utc
from app.services.logo import parse_logo, to_stored
from app.services.slug_service import SLUG_IN_USE, ensure_slug_usable, parse_uuid
from app.utils.audit import audit

logger = logging.getLogger(__name__)

MSG_REQUIRED = "Slug et titre requis"
MSG_NOT_FOUND = "Waitlist non trouvée"


def resolve_countdown_date(
    enabled: bool,
    supplied: Optional[datetime],
    current: Optional[datetime] = None,
) -> Optional[datetime]:
    """A countdown date only exists while the countdown is enabled.

    When enabled without a new date, the stored one is kept.
    """
    if not enabled:
        return None
    if supplied is not None:
        return as_utc(supplied)
    return current


def _clean_logo(value: Optional[str]) -> Optional[str]:
    return to_stored(parse_logo(value))


class WaitlistService:
    def __init__(self, db: Session):
        self.db = db

    # ----- reads -------------------------------------------------------

    def subscriber_counts(self, waitlist_ids) -> Dict:
        if not waitlist_ids:
            return {}
        rows = self.db.query(Subscriber.waitlist_id, func.count(Subscriber.id)).filter(
            Subscriber.waitlist_id.in_(waitlist_ids)
        ).group_by(Subscriber.waitlist_id).all()
        return {waitlist_id: count for waitlist_id, count in rows}

    def subscriber_count(self, waitlist_id) -> int:
        return self.subscriber_counts([waitlist_id]).get(waitlist_id, 0)

    def list_for_user(self, user: User) -> List[Tuple[Waitlist, int]]:
        """Owner's waitlists, newest first, with their subscriber counts."""
        waitlists = self.db.query(Waitlist).filter(
            Waitlist.user_id == user.id
        ).order_by(Waitlist.created_at.desc()).all()
        counts = self.subscriber_counts([w.id for w in waitlists])
        return [(w, counts.get(w.id, 0)) for w in waitlists]

    def get_owned(self, user: User, waitlist_id) -> Waitlist:
        """Waitlist ``waitlist_id`` if ``user`` owns it. Someone else's waitlist is reported as missing."""
        waitlist_uuid = parse_uuid(waitlist_id)
        waitlist = None
        if waitlist_uuid is not None:
            waitlist = self.db.query(Waitlist).filter(
                Waitlist.id == waitlist_uuid,
                Waitlist.user_id == user.id,
            ).first()
        if waitlist is None:
            raise NotFoundError(MSG_NOT_FOUND)
        return waitlist

    def get_by_slug(self, slug: str) -> Waitlist:
        waitlist = self.db.query(Waitlist).filter(Waitlist.slug == slug).first()
        if waitlist is None:
            raise NotFoundError(MSG_NOT_FOUND)
        return waitlist

    def list_subscribers(self, user: User, waitlist_id) -> List[Subscriber]:
        waitlist = self.get_owned(user, waitlist_id)
        return self.db.query(Subscriber).filter(
            Subscriber.waitlist_id == waitlist.id
        ).order_by(Subscriber.created_at.asc(), Subscriber.position.asc()).all()

    # ----- writes ------------------------------------------------------

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # Only unique column left to collide on is the slug
            logger.warning("Slug conflict while trying to %s a waitlist", action)
            raise ConflictError(SLUG_IN_USE)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to %s waitlist", action)
            raise UnexpectedError()

    def create(self, user: User, payload: WaitlistCreate) -> Waitlist:
        slug = (payload.slug or "").strip()
        title = (payload.title or "").strip()
        if not slug or not title:
            raise ValidationError(MSG_REQUIRED)

        ensure_slug_usable(self.db, slug)

        countdown_enabled = bool(payload.countdown_enabled)
        waitlist = Waitlist(
            user_id=user.id,
            slug=slug,
            title=title,
            description=payload.description or None,
            headline=payload.headline or title,
            subheadline=payload.subheadline or None,
            theme=payload.theme or DEFAULT_THEME,
            primary_color=payload.primary_color or DEFAULT_PRIMARY_COLOR,
            background_color=payload.background_color or DEFAULT_BACKGROUND_COLOR,
            logo_url=_clean_logo(payload.logo_url),
            collect_name=True if payload.collect_name is None else payload.collect_name,
            collect_company=bool(payload.collect_company),
            countdown_enabled=countdown_enabled,
            countdown_date=resolve_countdown_date(countdown_enabled, payload.countdown_date),
        )
        self.db.add(waitlist)
        self._commit("create")
        self.db.refresh(waitlist)
        audit("WAITLIST_CREATED", user_id=str(user.id), waitlist_id=str(waitlist.id), slug=waitlist.slug)
        return waitlist

    def update(self, user: User, waitlist_id, payload: WaitlistUpdate) -> Waitlist:
        """Apply the dashboard edit form.

        Optional texts and the logo are cleared when left empty, appearance
        falls back to the stored values, flags keep their value when omitted.
        """
        waitlist = self.get_owned(user, waitlist_id)

        new_slug = (payload.slug or "").strip()
        if new_slug and new_slug != waitlist.slug:
            ensure_slug_usable(self.db, new_slug, exclude_id=waitlist.id)
            waitlist.slug = new_slug

        if payload.title and payload.title.strip():
            waitlist.title = payload.title.strip()
        if payload.headline:
            waitlist.headline = payload.headline
        waitlist.description = payload.description or None
        waitlist.subheadline = payload.subheadline or None
        waitlist.theme = payload.theme or waitlist.theme
        waitlist.primary_color = payload.primary_color or waitlist.primary_color
        waitlist.background_color = payload.background_color or waitlist.background_color
        waitlist.logo_url = _clean_logo(payload.logo_url)
        if payload.collect_name is not None:
            waitlist.collect_name = payload.collect_name
        if payload.collect_company is not None:
            waitlist.collect_company = payload.collect_company
        if payload.countdown_enabled is not None:
            waitlist.countdown_enabled = payload.countdown_enabled
        waitlist.countdown_date = resolve_countdown_date(
            waitlist.countdown_enabled, payload.countdown_date, waitlist.countdown_date
        )
        waitlist.updated_at = utcnow()

        self._commit("update")
        self.db.refresh(waitlist)
        audit("WAITLIST_UPDATED", user_id=str(user.id), waitlist_id=str(waitlist.id))
        return waitlist

    def delete(self, user: User, waitlist_id) -> None:
        waitlist = self.get_owned(user, waitlist_id)
        deleted_id = str(waitlist.id)
        # ORM cascade removes subscribers, ON DELETE CASCADE backs it up in the database
        self.db.delete(waitlist)
        self._commit("delete")
        audit("WAITLIST_DELETED", user_id=str(user.id), waitlist_id=deleted_id)
