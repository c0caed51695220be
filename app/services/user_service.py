from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional
import logging

from app.models.user import User
from app.schemas.user import UserCreate
from app.core.security import get_password_hash, verify_password
from app.core.exceptions import ConflictError, ValidationError
from app.utils.audit import audit

logger = logging.getLogger(__name__)

MSG_EMAIL_TAKEN = "Email déjà enregistré"


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower().strip()).first()

    def create_user(self, user_create: UserCreate) -> User:
        email = user_create.email.lower().strip()
        if self.get_user_by_email(email):
            raise ConflictError(MSG_EMAIL_TAKEN)
        db_user = User(
            email=email,
            password_hash=get_password_hash(user_create.password),
            name=(user_create.name or "").strip() or None,
            is_active=True,
        )
        self.db.add(db_user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(MSG_EMAIL_TAKEN)
        self.db.refresh(db_user)
        audit("USER_REGISTERED", email=db_user.email, user_id=str(db_user.id))
        return db_user

    def authenticate_user(self, email: str, password: str) -> Optional[User]:
        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            audit("LOGIN_FAILED", email=email)
            return None
        return user

    def update_name(self, user: User, name: Optional[str]) -> User:
        user.name = (name or "").strip() or None
        self.db.commit()
        self.db.refresh(user)
        return user

    def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, user.password_hash):
            raise ValidationError("Mot de passe actuel incorrect")
        user.password_hash = get_password_hash(new_password)
        self.db.commit()
        logger.info("Password changed for user %s", user.id)
