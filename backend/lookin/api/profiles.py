import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from lookin.database import get_db
from lookin.schemas import ProfileUpdate, ProfileResponse, ProfileCard, TagToggle
from lookin.services.profile_service import ProfileService
from lookin.utils.security import get_current_user
from lookin.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("/me", response_model=Optional[ProfileResponse])
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get the current user's profile, or null if it has not been created yet.
    """
    profile = ProfileService.get_profile(db, current_user)
    if profile is None:
        return None
    return ProfileResponse.from_orm(profile)


@router.put("/me", response_model=ProfileResponse)
async def upsert_my_profile(
    profile_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create or update the current user's profile.

    Only the fields present in the request are changed.
    """
    logger.info(f"API request: Save profile for user {current_user.id}")
    try:
        profile = ProfileService.upsert_profile(db, current_user, profile_data)
        return ProfileResponse.from_orm(profile)
    except HTTPException as e:
        logger.error(f"API error: Failed to save profile for user {current_user.id}: {e.status_code} - {e.detail}")
        raise
    except Exception as e:
        logger.exception(f"API unexpected error: Failed to save profile for user {current_user.id}: {str(e)}")
        raise


@router.post("/me/toggle", response_model=ProfileResponse)
async def toggle_profile_tag(
    toggle: TagToggle,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Add a lifestyle or interest tag if absent, remove it if present.
    """
    profile = ProfileService.toggle_profile_tag(db, current_user, toggle.field, toggle.value)
    return ProfileResponse.from_orm(profile)


@router.get("/", response_model=List[ProfileCard])
async def get_profiles_by_location(
    location: str = Query(..., min_length=1, max_length=200),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Profiles whose location contains the given text, excluding your own.
    """
    profiles = ProfileService.get_users_by_location(db, location, exclude_user_id=current_user.id)
    logger.info(f"API response: {len(profiles)} profile(s) in '{location}' for user {current_user.id}")
    return [ProfileCard.from_orm(profile) for profile in profiles]


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get another user's public profile.
    """
    profile = ProfileService.get_profile_by_user_id(db, user_id)
    return ProfileResponse.from_orm(profile)
