"""Room listing service: create, browse, manage and count views/inquiries."""

import logging
from dataclasses import dataclass, field
from sqlalchemy.orm import Session
from sqlalchemy import or_
from fastapi import HTTPException, status
from typing import List, Optional
from datetime import datetime
from lookin.models.room_listing import RoomListing
from lookin.models.user import User
from lookin.schemas.listing import ListingCreate, ListingUpdate, ListingStats
from lookin.services.catalog_service import CatalogService
from lookin.utils.tags import invalid_tags, matches_all

logger = logging.getLogger(__name__)


@dataclass
class ListingFilters:
    """Filter parameters for browsing active listings."""

    q: str = ""
    city_id: str = ""
    city_name: str = ""
    min_rent: Optional[int] = None
    max_rent: Optional[int] = None
    room_type: str = ""
    amenities: List[str] = field(default_factory=list)
    sort: str = "newest"


class ListingService:
    """Service for room listing operations."""

    @staticmethod
    def create_listing(db: Session, listing_data: ListingCreate, owner: User) -> RoomListing:
        """Create a listing owned by the given user."""
        ListingService._check_amenities(listing_data.amenities)

        city_name = listing_data.city_name
        if listing_data.city_id and not city_name:
            city = CatalogService.find_city(listing_data.city_id)
            city_name = city.name if city else ""

        listing = RoomListing(
            user_id=owner.id,
            city_id=listing_data.city_id,
            city_name=city_name,
            title=listing_data.title,
            description=listing_data.description,
            room_type=listing_data.room_type,
            rent=listing_data.rent,
            deposit=listing_data.deposit,
            available_from=listing_data.available_from,
            amenities=listing_data.amenities,
            flatmate_preferences=listing_data.flatmate_preferences,
            house_rules=listing_data.house_rules,
            image_urls=listing_data.image_urls,
            is_active=listing_data.is_active,
        )
        db.add(listing)
        db.commit()
        db.refresh(listing)

        logger.info(f"User {owner.id} created listing {listing.id} in '{listing.city_name}'")
        return listing

    @staticmethod
    def browse_listings(db: Session, filters: ListingFilters) -> List[RoomListing]:
        """Active listings matching the filters."""
        query = db.query(RoomListing).filter(RoomListing.is_active == True)

        if filters.city_id and filters.city_name:
            query = query.filter(or_(
                RoomListing.city_id == filters.city_id,
                ListingService._contains(RoomListing.city_name, filters.city_name)
            ))
        elif filters.city_id:
            query = query.filter(RoomListing.city_id == filters.city_id)
        elif filters.city_name:
            query = query.filter(ListingService._contains(RoomListing.city_name, filters.city_name))

        if filters.q:
            text = filters.q.strip()
            query = query.filter(or_(
                ListingService._contains(RoomListing.title, text),
                ListingService._contains(RoomListing.city_name, text),
                ListingService._contains(RoomListing.description, text)
            ))
        if filters.min_rent is not None:
            query = query.filter(RoomListing.rent >= filters.min_rent)
        if filters.max_rent is not None:
            query = query.filter(RoomListing.rent <= filters.max_rent)
        if filters.room_type:
            query = query.filter(RoomListing.room_type == filters.room_type)

        listings = query.order_by(*ListingService._ordering(filters.sort)).all()

        # Amenities are stored as a JSON list, match them in Python
        if filters.amenities:
            listings = [
                listing for listing in listings
                if matches_all(filters.amenities, listing.amenities)
            ]

        logger.debug(f"Browse returned {len(listings)} listing(s) for filters {filters}")
        return listings

    @staticmethod
    def get_user_listings(db: Session, user: User) -> List[RoomListing]:
        """All of the user's listings, active or not, newest first."""
        return db.query(RoomListing).filter(
            RoomListing.user_id == user.id
        ).order_by(RoomListing.created_at.desc(), RoomListing.id.desc()).all()

    @staticmethod
    def get_user_stats(db: Session, user: User) -> ListingStats:
        listings = ListingService.get_user_listings(db, user)
        return ListingStats(
            total_listings=len(listings),
            active_listings=sum(1 for listing in listings if listing.is_active),
            total_views=sum(listing.views or 0 for listing in listings),
            total_inquiries=sum(listing.inquiries or 0 for listing in listings),
        )

    @staticmethod
    def get_listing(db: Session, listing_id: int) -> RoomListing:
        listing = db.query(RoomListing).filter(RoomListing.id == listing_id).first()
        if not listing:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Listing not found"
            )
        return listing

    @staticmethod
    def get_visible_listing(db: Session, listing_id: int, user: User) -> RoomListing:
        """A listing the user may see: any active one, or one of their own."""
        listing = ListingService.get_listing(db, listing_id)
        if not listing.is_active and listing.user_id != user.id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Listing not found"
            )
        return listing

    @staticmethod
    def update_listing(db: Session, listing_id: int, listing_data: ListingUpdate, user: User) -> RoomListing:
        """Apply a partial update to one of the user's listings."""
        listing = ListingService._get_owned_listing(db, listing_id, user)
        update_data = listing_data.model_dump(exclude_unset=True)

        if "amenities" in update_data:
            ListingService._check_amenities(update_data["amenities"] or [])

        for field_name, value in update_data.items():
            if value is None and field_name in ("title", "is_active"):
                continue
            if value is None and field_name in ("amenities", "flatmate_preferences", "house_rules", "image_urls"):
                value = []
            setattr(listing, field_name, value)

        listing.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(listing)

        logger.info(f"User {user.id} updated listing {listing.id}: {sorted(update_data)}")
        return listing

    @staticmethod
    def toggle_active(db: Session, listing_id: int, user: User) -> RoomListing:
        listing = ListingService._get_owned_listing(db, listing_id, user)
        listing.is_active = not listing.is_active
        listing.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(listing)
        logger.info(f"Listing {listing.id} is now {'active' if listing.is_active else 'inactive'}")
        return listing

    @staticmethod
    def delete_listing(db: Session, listing_id: int, user: User):
        listing = ListingService._get_owned_listing(db, listing_id, user)
        db.delete(listing)
        db.commit()
        logger.info(f"User {user.id} deleted listing {listing_id}")

    @staticmethod
    def increment_views(db: Session, listing_id: int, user: User) -> RoomListing:
        """Atomically bump the view counter."""
        listing = ListingService.get_visible_listing(db, listing_id, user)
        db.query(RoomListing).filter(RoomListing.id == listing_id).update(
            {RoomListing.views: RoomListing.views + 1},
            synchronize_session=False
        )
        db.commit()
        db.refresh(listing)
        return listing

    @staticmethod
    def increment_inquiries(db: Session, listing: RoomListing):
        db.query(RoomListing).filter(RoomListing.id == listing.id).update(
            {RoomListing.inquiries: RoomListing.inquiries + 1},
            synchronize_session=False
        )
        db.commit()
        db.refresh(listing)

    @staticmethod
    def _get_owned_listing(db: Session, listing_id: int, user: User) -> RoomListing:
        listing = ListingService.get_listing(db, listing_id)
        if listing.user_id != user.id:
            logger.warning(f"User {user.id} denied access to listing {listing_id}: not the owner")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not own this listing"
            )
        return listing

    @staticmethod
    def _check_amenities(amenities: List[str]):
        unknown = invalid_tags(amenities, CatalogService.amenity_ids())
        if unknown:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown amenity option(s): {', '.join(unknown)}"
            )

    @staticmethod
    def _contains(column, text: str):
        """Case-insensitive literal substring match."""
        escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return column.ilike(f"%{escaped}%", escape="\\")

    @staticmethod
    def _ordering(sort: str):
        if sort == "budget-low":
            return (RoomListing.rent.asc(), RoomListing.id.desc())
        if sort == "budget-high":
            return (RoomListing.rent.desc(), RoomListing.id.desc())
        return (RoomListing.created_at.desc(), RoomListing.id.desc())
