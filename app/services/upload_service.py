import logging
import secrets
import time
from pathlib import Path
from typing import Optional

from app.core.config import settings
from app.core.exceptions import UnexpectedError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_LOGO_TYPES = {
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/gif",
    "image/webp",
    "image/svg+xml",
}

# Stored extension always follows the validated content type, never the client filename
EXTENSION_BY_TYPE = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}

LOGO_SUBDIR = "logos"


def validate_logo(content_type: Optional[str], size: int) -> None:
    if content_type not in ALLOWED_LOGO_TYPES:
        raise ValidationError("Type de fichier non autorisé. Utilisez PNG, JPEG, GIF, WebP ou SVG")
    if size > settings.MAX_LOGO_SIZE_BYTES:
        max_mb = settings.MAX_LOGO_SIZE_BYTES // (1024 * 1024)
        raise ValidationError(f"Le fichier est trop volumineux. Taille maximale : {max_mb}MB")


def store_logo(content: bytes, content_type: str) -> str:
    """Write the logo under UPLOAD_DIR/logos with a unique name and return its public URL."""
    validate_logo(content_type, len(content))

    upload_dir = Path(settings.UPLOAD_DIR) / LOGO_SUBDIR
    upload_dir.mkdir(parents=True, exist_ok=True)

    # Generate unique filename
    stored_name = f"{int(time.time() * 1000)}-{secrets.token_hex(6)}.{EXTENSION_BY_TYPE[content_type]}"
    try:
        with open(upload_dir / stored_name, "wb") as buffer:
            buffer.write(content)
    except OSError:
        logger.exception("Could not write logo %s", stored_name)
        raise UnexpectedError("Erreur lors de l'upload du fichier")

    return f"/uploads/{LOGO_SUBDIR}/{stored_name}"
