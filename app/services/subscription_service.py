import json
import logging
import re
from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, UnexpectedError, ValidationError
from app.models.subscriber import Subscriber
from app.models.waitlist import Waitlist
from app.services.slug_service import parse_uuid
from app.utils.audit import audit

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+")
MAX_EMAIL_LENGTH = 254

MSG_MISSING = "ID de waitlist et email requis"
MSG_INVALID_EMAIL = "Adresse email invalide"
MSG_NOT_FOUND = "Waitlist non trouvée"
MSG_DUPLICATE = "Cet email est déjà inscrit à cette waitlist"
MSG_SUCCESS = "Inscription réussie"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class SubscriptionService:
    def __init__(self, db: Session):
        self.db = db

    def _find(self, waitlist_id, email: str) -> Optional[Subscriber]:
        return self.db.query(Subscriber).filter(
            Subscriber.waitlist_id == waitlist_id,
            Subscriber.email == email,
        ).first()

    def count(self, waitlist_id) -> int:
        return self.db.query(func.count(Subscriber.id)).filter(
            Subscriber.waitlist_id == waitlist_id
        ).scalar() or 0

    def subscribe(
        self,
        waitlist_id: Optional[str],
        email: Optional[str],
        name: Optional[str] = None,
        company: Optional[str] = None,
        custom_data: Any = None,
    ) -> Subscriber:
        """Record a public sign-up and give it the next position in the waitlist.

        Checks run in order and each fails differently: missing fields,
        unknown waitlist, malformed email, already registered email.
        """
        if not waitlist_id or not email or not email.strip():
            raise ValidationError(MSG_MISSING)

        email = normalize_email(email)
        waitlist_uuid = parse_uuid(waitlist_id)
        waitlist = None
        if waitlist_uuid is not None:
            # Row lock serializes concurrent sign-ups on one waitlist so that
            # count + 1 stays unique (FOR UPDATE is skipped on SQLite).
            waitlist = self.db.query(Waitlist).filter(
                Waitlist.id == waitlist_uuid
            ).with_for_update().first()
        if waitlist is None:
            self.db.rollback()
            raise NotFoundError(MSG_NOT_FOUND)

        if len(email) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.fullmatch(email):
            self.db.rollback()
            raise ValidationError(MSG_INVALID_EMAIL)

        waitlist_pk = waitlist.id
        if self._find(waitlist_pk, email):
            self.db.rollback()
            audit("SUBSCRIBE_DUPLICATE", email=email, waitlist_id=str(waitlist_pk))
            raise ConflictError(MSG_DUPLICATE)

        position = self.count(waitlist_pk) + 1
        subscriber = Subscriber(
            waitlist_id=waitlist_pk,
            email=email,
            name=name or None,
            company=company or None,
            custom_data=json.dumps(custom_data, ensure_ascii=False) if custom_data else None,
            position=position,
        )
        self.db.add(subscriber)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # Lost a race against the same email: the unique constraint caught it
            if self._find(waitlist_pk, email):
                audit("SUBSCRIBE_DUPLICATE", email=email, waitlist_id=str(waitlist_pk))
                raise ConflictError(MSG_DUPLICATE)
            logger.exception("Subscriber insert rejected for waitlist %s", waitlist_pk)
            raise UnexpectedError()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Subscriber insert failed for waitlist %s", waitlist_pk)
            raise UnexpectedError()

        self.db.refresh(subscriber)
        audit("SUBSCRIBED", email=email, waitlist_id=str(waitlist_pk), position=position)
        return subscriber
