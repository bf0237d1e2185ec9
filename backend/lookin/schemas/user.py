"""User-related Pydantic schemas."""

from pydantic import BaseModel, Field, validator, EmailStr
from datetime import datetime
from typing import Optional


class UserBase(BaseModel):
    """Base user schema with common fields."""
    email: EmailStr
    full_name: Optional[str] = Field(None, max_length=100)


class UserCreate(UserBase):
    """Schema for user registration."""
    password: str = Field(..., min_length=6, max_length=100)

    @validator('email')
    def email_lowercase(cls, v):
        return v.lower()

    @validator('full_name')
    def full_name_stripped(cls, v):
        if v is None:
            return v
        return v.strip() or None


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str

    @validator('email')
    def email_lowercase(cls, v):
        return v.lower()


class EmailConfirm(BaseModel):
    """Schema for confirming an email address."""
    token: str = Field(..., min_length=1)


class ResendConfirmation(BaseModel):
    """Schema for requesting a new confirmation token."""
    email: EmailStr


class UserResponse(UserBase):
    """Schema for user response data."""
    id: int
    avatar_url: Optional[str] = None
    is_active: bool
    email_confirmed: bool
    created_at: datetime
    last_seen: datetime

    class Config:
        from_attributes = True


class Token(BaseModel):
    """Schema for authentication token."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class SignUpResponse(BaseModel):
    """Result of registration: a token only when no confirmation is pending."""
    user: UserResponse
    confirmation_required: bool
    access_token: Optional[str] = None
    token_type: str = "bearer"
