"""Profile-related Pydantic schemas."""

from pydantic import BaseModel, Field, validator
from datetime import datetime
from typing import Optional, List
from lookin.utils.tags import unique_tags


class ProfileBase(BaseModel):
    """Editable profile fields."""
    name: Optional[str] = Field(None, max_length=100)
    age: Optional[int] = Field(None, ge=16, le=120)
    phone: Optional[str] = Field(None, max_length=30)
    location: Optional[str] = Field(None, max_length=200)
    occupation: Optional[str] = Field(None, max_length=100)
    company: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=2000)
    budget: Optional[int] = Field(None, ge=0)
    move_in_date: Optional[str] = Field(None, max_length=20)
    room_type: Optional[str] = Field(None, max_length=50)
    lifestyle: List[str] = []
    interests: List[str] = []
    profile_photo: Optional[str] = Field(None, max_length=500)

    @validator('location', 'name', 'occupation', 'company')
    def strip_text(cls, v):
        if v is None:
            return v
        return v.strip() or None

    @validator('lifestyle', 'interests')
    def dedupe_tags(cls, v):
        return unique_tags(v)


class ProfileUpdate(ProfileBase):
    """Schema for creating or updating the caller's profile."""
    pass


class TagToggle(BaseModel):
    """Toggle one tag of a multi-select profile field."""
    field: str = Field(..., pattern="^(lifestyle|interests)$")
    value: str = Field(..., min_length=1, max_length=50)


class ProfileResponse(ProfileBase):
    """Schema for profile response data."""
    id: int
    user_id: int
    email: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @validator('lifestyle', 'interests', pre=True)
    def none_as_empty(cls, v):
        return v or []

    class Config:
        from_attributes = True


class ProfileCard(BaseModel):
    """Compact profile used in match lists."""
    user_id: int
    name: Optional[str] = None
    age: Optional[int] = None
    location: Optional[str] = None
    occupation: Optional[str] = None
    budget: Optional[int] = None
    room_type: Optional[str] = None
    lifestyle: List[str] = []
    interests: List[str] = []
    profile_photo: Optional[str] = None
    created_at: datetime

    @validator('lifestyle', 'interests', pre=True)
    def none_as_empty(cls, v):
        return v or []

    class Config:
        from_attributes = True
