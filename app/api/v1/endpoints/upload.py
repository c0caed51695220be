from fastapi import APIRouter, Depends, UploadFile, File
from typing import Optional

from app.core.deps import get_current_active_user
from app.core.exceptions import ValidationError
from app.models.user import User
from app.services.upload_service import store_logo, validate_logo
from app.utils.audit import audit

router = APIRouter()

@router.post("/logo")
async def upload_logo(
    file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_active_user)
):
    """Upload a waitlist logo (PNG, JPEG, GIF, WebP or SVG, 5MB max)"""
    if file is None:
        raise ValidationError("Aucun fichier fourni")

    # Reject on declared type/size before reading the body
    validate_logo(file.content_type, file.size or 0)
    content = await file.read()

    url = store_logo(content, file.content_type)
    audit("LOGO_UPLOADED", user_id=str(current_user.id), size=len(content))
    return {"url": url}
