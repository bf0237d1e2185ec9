import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
from lookin.database import get_db
from lookin.schemas import (
    ListingCreate,
    ListingUpdate,
    ListingResponse,
    ListingStats,
    ConversationResponse,
)
from lookin.services.listing_service import ListingService, ListingFilters
from lookin.services.conversation_service import ConversationService
from lookin.utils.security import get_current_user
from lookin.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/listings", tags=["Listings"])


@router.post("/", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_listing(
    listing_data: ListingCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Post a room listing.

    - **title**: 3-200 chars
    - **rent** / **deposit**: Amounts; anything non-numeric is stored as 0
    - **image_urls**: At most 10 uploaded images
    """
    logger.info(f"API request: Create listing by user {current_user.id} in '{listing_data.city_id}'")
    try:
        listing = ListingService.create_listing(db, listing_data, current_user)
        logger.info(f"API response: Created listing {listing.id}")
        return ListingResponse.from_orm(listing)
    except HTTPException as e:
        logger.error(f"API error: Failed to create listing for user {current_user.id}: {e.status_code} - {e.detail}")
        raise
    except Exception as e:
        logger.exception(f"API unexpected error: Failed to create listing for user {current_user.id}: {str(e)}")
        raise


@router.get("/", response_model=List[ListingResponse])
async def browse_listings(
    q: str = Query("", max_length=100),
    city_id: str = Query("", max_length=50),
    min_rent: Optional[int] = Query(None, ge=0),
    max_rent: Optional[int] = Query(None, ge=0),
    room_type: str = Query("", max_length=50),
    amenities: List[str] = Query([]),
    sort: str = Query("newest", pattern="^(newest|budget-low|budget-high)$"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Browse active listings.

    Every amenity given must be offered by the listing.
    """
    filters = ListingFilters(
        q=q,
        city_id=city_id,
        min_rent=min_rent,
        max_rent=max_rent,
        room_type=room_type,
        amenities=amenities,
        sort=sort,
    )
    listings = ListingService.browse_listings(db, filters)
    logger.info(f"API response: Returning {len(listings)} listing(s) to user {current_user.id}")
    return [ListingResponse.from_orm(listing) for listing in listings]


@router.get("/mine", response_model=List[ListingResponse])
async def get_my_listings(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Your listings, active or not."""
    listings = ListingService.get_user_listings(db, current_user)
    return [ListingResponse.from_orm(listing) for listing in listings]


@router.get("/mine/stats", response_model=ListingStats)
async def get_my_listing_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Totals of your listings, views and inquiries."""
    return ListingService.get_user_stats(db, current_user)


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ListingResponse.from_orm(ListingService.get_visible_listing(db, listing_id, current_user))


@router.patch("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: int,
    listing_data: ListingUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update your listing. Only the fields present in the request are changed.
    """
    logger.info(f"API request: Update listing {listing_id} by user {current_user.id}")
    try:
        listing = ListingService.update_listing(db, listing_id, listing_data, current_user)
        return ListingResponse.from_orm(listing)
    except HTTPException as e:
        logger.error(f"API error: Failed to update listing {listing_id}: {e.status_code} - {e.detail}")
        raise


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_listing(
    listing_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    logger.info(f"API request: Delete listing {listing_id} by user {current_user.id}")
    try:
        ListingService.delete_listing(db, listing_id, current_user)
    except HTTPException as e:
        logger.error(f"API error: Failed to delete listing {listing_id}: {e.status_code} - {e.detail}")
        raise
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{listing_id}/toggle-active", response_model=ListingResponse)
async def toggle_listing_active(
    listing_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Show or hide your listing from browsing."""
    listing = ListingService.toggle_active(db, listing_id, current_user)
    return ListingResponse.from_orm(listing)


@router.post("/{listing_id}/view", response_model=ListingResponse)
async def record_listing_view(
    listing_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Count one view of a listing."""
    listing = ListingService.increment_views(db, listing_id, current_user)
    return ListingResponse.from_orm(listing)


@router.post("/{listing_id}/inquire", response_model=ConversationResponse)
async def inquire_about_listing(
    listing_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Contact the owner of a listing.

    Opens (or reuses) your conversation with the owner and counts the inquiry.
    """
    logger.info(f"API request: User {current_user.id} inquiring about listing {listing_id}")
    listing = ListingService.get_visible_listing(db, listing_id, current_user)
    if listing.user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot inquire about your own listing"
        )

    try:
        conversation = ConversationService.create_conversation(db, listing.user_id, current_user)
        ListingService.increment_inquiries(db, listing)
        logger.info(f"API response: Inquiry on listing {listing_id} in conversation {conversation.id}")
        return conversation
    except HTTPException as e:
        logger.error(f"API error: Inquiry on listing {listing_id} failed: {e.status_code} - {e.detail}")
        raise
