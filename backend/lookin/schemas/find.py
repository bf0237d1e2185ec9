"""Response schema for the find flow."""

from pydantic import BaseModel
from typing import List
from lookin.schemas.profile import ProfileCard
from lookin.schemas.listing import ListingResponse


class FindResponse(BaseModel):
    """Flatmates and rooms for one location."""
    location: str
    city_id: str = ""
    flatmates: List[ProfileCard]
    rooms: List[ListingResponse]

    class Config:
        from_attributes = True
