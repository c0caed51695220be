import hashlib
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_logger = logging.getLogger("audit")

# Events emitted by the services
EVENTS = frozenset({
    "USER_REGISTERED",
    "LOGIN_FAILED",
    "WAITLIST_CREATED",
    "WAITLIST_UPDATED",
    "WAITLIST_DELETED",
    "SUBSCRIBED",
    "SUBSCRIBE_DUPLICATE",
    "LOGO_UPLOADED",
})


def email_fingerprint(email: Optional[str]) -> Optional[str]:
    """Short stable hash so one address can be followed across lines without logging it."""
    if not email:
        return None
    return hashlib.sha256(email.strip().lower().encode()).hexdigest()[:12]


def audit(
    event: str,
    *,
    email: Optional[str] = None,
    user_id: Optional[str] = None,
    waitlist_id: Optional[str] = None,
    **fields: Any,
) -> None:
    """Write one JSON line on the ``audit`` logger.

    Subscriber and owner emails only appear as a fingerprint. Never pass passwords.
    """
    if event not in EVENTS:
        _logger.warning("unknown audit event %s", event)

    payload: Dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
    }
    if email:
        payload["email_hash"] = email_fingerprint(email)
    if user_id:
        payload["user_id"] = user_id
    if waitlist_id:
        payload["waitlist_id"] = waitlist_id
    payload.update(fields)
    _logger.info(json.dumps(payload, ensure_ascii=False, default=str))
