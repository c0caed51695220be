from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from datetime import datetime
import uuid

from app.schemas.base import CamelModel


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(min_length=6)
    name: Optional[str] = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserProfileUpdate(BaseModel):
    name: Optional[str] = None


class UserPasswordUpdate(CamelModel):
    current_password: str
    new_password: str = Field(min_length=6)


class UserProfile(CamelModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class SessionUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    name: Optional[str] = None


class SessionResponse(BaseModel):
    user: SessionUser
    expires: Optional[str] = None


class Token(BaseModel):
    access_token: str
    token_type: str
