from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.schemas.subscriber import SubscribeRequest, SubscribeResponse
from app.services.subscription_service import MSG_SUCCESS, SubscriptionService
from app.utils.rate_limiter import allow_for_ip, client_ip

router = APIRouter()

@router.post("/subscribe", response_model=SubscribeResponse, status_code=status.HTTP_201_CREATED)
async def subscribe(
    payload: SubscribeRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    """Public sign-up to a waitlist. Answers with the subscriber's position."""
    # Per-IP rate limit
    if not allow_for_ip("subscribe", client_ip(request), settings.SUBSCRIBE_MAX_PER_MINUTE, 60):
        raise HTTPException(status_code=429, detail="Trop de requêtes. Réessayez plus tard.")

    subscriber = SubscriptionService(db).subscribe(
        waitlist_id=payload.waitlist_id,
        email=payload.email,
        name=payload.name,
        company=payload.company,
        custom_data=payload.custom_data,
    )
    return SubscribeResponse(message=MSG_SUCCESS, position=subscriber.position)
