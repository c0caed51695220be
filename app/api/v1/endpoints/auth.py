from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from typing import Optional

from app.core.database import get_db
from app.core.security import create_access_token, decode_token
from app.core.deps import bearer_token, get_current_active_user, get_current_user_optional
from app.core.exceptions import AuthenticationError
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin, UserProfile, Token, SessionResponse, SessionUser
from app.services.user_service import UserService

router = APIRouter()

@router.post("/register", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def register(user_create: UserCreate, db: Session = Depends(get_db)):
    """Register a new waitlist owner"""
    return UserService(db).create_user(user_create)

@router.post("/login", response_model=Token)
async def login(user_login: UserLogin, db: Session = Depends(get_db)):
    """Login user and return access token"""
    user = UserService(db).authenticate_user(user_login.email, user_login.password)
    if not user:
        raise AuthenticationError("Email ou mot de passe incorrect")
    if not user.is_active:
        raise AuthenticationError("Compte désactivé")

    access_token = create_access_token(data={"sub": user.email})
    return {"access_token": access_token, "token_type": "bearer"}

@router.post("/refresh", response_model=Token)
async def refresh_token(current_user: User = Depends(get_current_active_user)):
    """Refresh access token"""
    access_token = create_access_token(data={"sub": current_user.email})
    return {"access_token": access_token, "token_type": "bearer"}

@router.get("/session", response_model=Optional[SessionResponse])
async def get_session(
    request: Request,
    current_user: Optional[User] = Depends(get_current_user_optional)
):
    """Current session, or null for anonymous callers."""
    if current_user is None:
        return None

    expires = None
    token = bearer_token(request)
    payload = decode_token(token) if token else None
    if payload and payload.get("exp"):
        expires = datetime.fromtimestamp(payload["exp"], tz=timezone.utc).isoformat()

    return SessionResponse(user=SessionUser.model_validate(current_user), expires=expires)
