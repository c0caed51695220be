"""Slug validation, availability and derivation for waitlist public URLs.

The same checks run for the live availability endpoint and before any
waitlist write, in this order, stopping at the first failure:

1. format  -> lowercase letters, digits and hyphens only
2. length  -> 3 to 50 characters
3. taken   -> no other waitlist owns the slug
"""
import re
import unicodedata
import uuid
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, ValidationError
from app.models.waitlist import Waitlist

SLUG_PATTERN = re.compile(r"[a-z0-9-]+")
SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 50

MSG_FORMAT = "L'URL ne peut contenir que des lettres minuscules, des chiffres et des tirets"
MSG_TOO_SHORT = f"L'URL doit contenir au moins {SLUG_MIN_LENGTH} caractères"
MSG_TOO_LONG = f"L'URL ne peut pas dépasser {SLUG_MAX_LENGTH} caractères"
MSG_TAKEN = "Cette URL est déjà utilisée"
MSG_AVAILABLE = "URL disponible"

# Message returned when a create/update is refused because the slug is in use
SLUG_IN_USE = "Ce slug est déjà utilisé"


@dataclass(frozen=True)
class SlugCheck:
    available: bool
    message: str
    reason: Optional[str] = None


def parse_uuid(value: Union[str, uuid.UUID, None]) -> Optional[uuid.UUID]:
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def validate_slug_shape(slug: str) -> Optional[SlugCheck]:
    """Format then length. Returns the failing check, or None if the slug is well formed."""
    if not SLUG_PATTERN.fullmatch(slug):
        return SlugCheck(available=False, reason="format", message=MSG_FORMAT)
    if len(slug) < SLUG_MIN_LENGTH:
        return SlugCheck(available=False, reason="length", message=MSG_TOO_SHORT)
    if len(slug) > SLUG_MAX_LENGTH:
        return SlugCheck(available=False, reason="length", message=MSG_TOO_LONG)
    return None


def find_slug_owner(db: Session, slug: str) -> Optional[uuid.UUID]:
    row = db.query(Waitlist.id).filter(Waitlist.slug == slug).first()
    return row[0] if row else None


def check_slug_availability(
    db: Session, slug: str, exclude_id: Union[str, uuid.UUID, None] = None
) -> SlugCheck:
    """Availability as reported to the dashboard while the owner types."""
    failure = validate_slug_shape(slug)
    if failure:
        return failure

    owner_id = find_slug_owner(db, slug)
    exclude_uuid = parse_uuid(exclude_id)
    # The waitlist being edited may always keep its own slug
    if owner_id is not None and exclude_uuid is not None and owner_id == exclude_uuid:
        return SlugCheck(available=True, message=MSG_AVAILABLE)
    if owner_id is not None:
        return SlugCheck(available=False, reason="taken", message=MSG_TAKEN)
    return SlugCheck(available=True, message=MSG_AVAILABLE)


def ensure_slug_usable(
    db: Session, slug: str, exclude_id: Union[str, uuid.UUID, None] = None
) -> None:
    """Raise unless ``slug`` may be written. Used before every waitlist insert/update."""
    check = check_slug_availability(db, slug, exclude_id)
    if check.available:
        return
    if check.reason == "taken":
        raise ConflictError(SLUG_IN_USE)
    raise ValidationError(check.message, error_code=check.reason)


def generate_slug(title: str) -> str:
    """Suggest a slug from a title: "Café Déjà Vu!" -> "cafe-deja-vu".

    The result is only a suggestion; it still goes through validation.
    """
    value = unicodedata.normalize("NFD", (title or "").lower())
    value = "".join(ch for ch in value if not unicodedata.combining(ch))
    value = re.sub(r"[^a-z0-9]+", "-", value)
    return value.strip("-")
