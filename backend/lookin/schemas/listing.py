"""Room listing Pydantic schemas."""

import re
from pydantic import BaseModel, Field, validator
from datetime import datetime
from typing import Optional, List, Union
from lookin.config import get_settings
from lookin.utils.tags import unique_tags

settings = get_settings()
AMOUNT_PREFIX = re.compile(r"\s*[+-]?\d+")


def parse_amount(value) -> int:
    """Coerce a form amount to an integer, treating non-numeric input as 0.

    Strings are read up to the first non-digit after removing thousands
    separators, so "12000.5" and "5000/-" give 12000 and 5000.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    match = AMOUNT_PREFIX.match(str(value).replace(",", ""))
    if not match:
        return 0
    return max(int(match.group()), 0)


def check_image_count(images):
    if images is not None and len(images) > settings.MAX_LISTING_IMAGES:
        raise ValueError(f'A listing can have at most {settings.MAX_LISTING_IMAGES} images')
    return images


class ListingCreate(BaseModel):
    """Schema for creating a room listing."""
    city_id: str = Field("", max_length=50)
    city_name: str = Field("", max_length=100)
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    room_type: Optional[str] = Field(None, max_length=50)
    rent: Union[int, float, str, None] = 0
    deposit: Union[int, float, str, None] = 0
    available_from: Optional[str] = Field(None, max_length=20)
    amenities: List[str] = []
    flatmate_preferences: List[str] = []
    house_rules: List[str] = []
    image_urls: List[str] = []
    is_active: bool = True

    @validator('title')
    def title_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()

    @validator('rent', 'deposit')
    def amount(cls, v):
        return parse_amount(v)

    @validator('amenities', 'flatmate_preferences', 'house_rules')
    def dedupe(cls, v):
        return unique_tags(v)

    @validator('image_urls')
    def limit_images(cls, v):
        return check_image_count(v)


class ListingUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied."""
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    room_type: Optional[str] = Field(None, max_length=50)
    rent: Union[int, float, str, None] = None
    deposit: Union[int, float, str, None] = None
    available_from: Optional[str] = Field(None, max_length=20)
    amenities: Optional[List[str]] = None
    flatmate_preferences: Optional[List[str]] = None
    house_rules: Optional[List[str]] = None
    image_urls: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @validator('title')
    def title_not_blank(cls, v):
        if v is None:
            return v
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()

    @validator('rent', 'deposit')
    def amount(cls, v):
        return parse_amount(v)

    @validator('amenities', 'flatmate_preferences', 'house_rules')
    def dedupe(cls, v):
        if v is None:
            return v
        return unique_tags(v)

    @validator('image_urls')
    def limit_images(cls, v):
        return check_image_count(v)


class ListingResponse(BaseModel):
    """Schema for listing response data."""
    id: int
    user_id: int
    city_id: str
    city_name: str
    title: str
    description: Optional[str] = None
    room_type: Optional[str] = None
    rent: int
    deposit: int
    available_from: Optional[str] = None
    amenities: List[str] = []
    flatmate_preferences: List[str] = []
    house_rules: List[str] = []
    image_urls: List[str] = []
    is_active: bool
    views: int
    inquiries: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    @validator('amenities', 'flatmate_preferences', 'house_rules', 'image_urls', pre=True)
    def none_as_empty(cls, v):
        return v or []

    @validator('city_id', 'city_name', pre=True)
    def none_as_blank(cls, v):
        return v or ""

    class Config:
        from_attributes = True


class ListingStats(BaseModel):
    """Totals shown on the list flow dashboard."""
    total_listings: int
    active_listings: int
    total_views: int
    total_inquiries: int
