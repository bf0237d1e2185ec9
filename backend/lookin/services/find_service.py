"""Find flow: flatmate candidates and rooms for a city or the caller's own location."""

import logging
from dataclasses import dataclass, field
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List, Optional
from lookin.models.profile import Profile
from lookin.models.room_listing import RoomListing
from lookin.models.user import User
from lookin.services.catalog_service import CatalogService
from lookin.services.listing_service import ListingService, ListingFilters
from lookin.services.profile_service import ProfileService
from lookin.utils.tags import matches_any

logger = logging.getLogger(__name__)


@dataclass
class FindFilters:
    """Search parameters entered on the find screen."""

    city_id: str = ""
    q: str = ""
    min_budget: Optional[int] = None
    max_budget: Optional[int] = None
    lifestyle: List[str] = field(default_factory=list)
    sort: str = "newest"


@dataclass
class FindResult:
    location: str
    city_id: str
    flatmates: List[Profile]
    rooms: List[RoomListing]


class FindService:
    """Match candidates and rooms for the find flow."""

    @staticmethod
    def find(db: Session, user: User, filters: FindFilters) -> FindResult:
        location = FindService._target_location(db, user, filters.city_id)
        city_id = filters.city_id or FindService._city_id_for(location)
        logger.info(f"User {user.id} searching in '{location}' (query='{filters.q}')")

        candidates = ProfileService.get_users_by_location(db, location, exclude_user_id=user.id)
        flatmates = FindService.filter_flatmates(candidates, filters)

        rooms = ListingService.browse_listings(db, ListingFilters(
            q=filters.q,
            city_id=city_id,
            city_name=location,
            min_rent=filters.min_budget,
            max_rent=filters.max_budget,
            sort=filters.sort,
        ))
        # The caller's own rooms are shown on the list flow instead
        rooms = [room for room in rooms if room.user_id != user.id]

        return FindResult(
            location=location,
            city_id=city_id,
            flatmates=flatmates,
            rooms=rooms,
        )

    @staticmethod
    def filter_flatmates(profiles: List[Profile], filters: FindFilters) -> List[Profile]:
        """Apply text search, budget range and lifestyle filters, then sort."""
        needle = (filters.q or "").strip().lower()

        def keep(profile: Profile) -> bool:
            if needle and not any(
                needle in (value or "").lower()
                for value in (profile.name, profile.occupation, profile.location)
            ):
                return False
            if filters.min_budget is not None and (profile.budget is None or profile.budget < filters.min_budget):
                return False
            if filters.max_budget is not None and (profile.budget is None or profile.budget > filters.max_budget):
                return False
            return matches_any(filters.lifestyle, profile.lifestyle)

        result = [profile for profile in profiles if keep(profile)]

        if filters.sort == "budget-low":
            result.sort(key=lambda p: (p.budget is None, p.budget or 0))
        elif filters.sort == "budget-high":
            result.sort(key=lambda p: (p.budget is None, -(p.budget or 0)))
        return result

    @staticmethod
    def _target_location(db: Session, user: User, city_id: str) -> str:
        if city_id:
            return CatalogService.get_city(city_id).name

        profile = ProfileService.get_profile(db, user)
        if profile and profile.location:
            return profile.location

        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please complete your profile with location information to find flatmates"
        )

    @staticmethod
    def _city_id_for(location: str) -> str:
        """Catalog city named in a free-text location, e.g. "HSR Layout, Bangalore"."""
        lowered = location.lower()
        for city in CatalogService.search_cities():
            if city.name.lower() in lowered:
                return city.id
        return ""
