from fastapi import Depends, Request
from sqlalchemy.orm import Session
from typing import Optional
from app.core.database import get_db
from app.core.exceptions import AuthenticationError
from app.core.security import verify_token
from app.models.user import User


def bearer_token(request: Request) -> Optional[str]:
    auth = request.headers.get("Authorization")
    if not auth or not auth.lower().startswith("bearer "):
        return None
    return auth.split(" ", 1)[1].strip() or None


async def get_current_user_optional(
    request: Request,
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Return current user if Authorization header present and valid; else None.

    This is the single source of caller identity. Every authenticated route
    builds on it, so tests or another identity provider can swap it through
    ``app.dependency_overrides``.
    """
    token = bearer_token(request)
    if not token:
        return None
    email = verify_token(token)
    if not email:
        return None
    return db.query(User).filter(User.email == email).first()


async def get_current_user(
    current_user: Optional[User] = Depends(get_current_user_optional)
) -> User:
    """Get current authenticated user"""
    if current_user is None:
        raise AuthenticationError("Non authentifié")
    return current_user


async def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """Get current active user"""
    if not current_user.is_active:
        raise AuthenticationError("Compte désactivé")
    return current_user
