"""Profile service: the caller's profile, public profiles and location matching."""

import logging
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from typing import List, Optional
from datetime import datetime
from lookin.models.profile import Profile
from lookin.models.user import User
from lookin.schemas.profile import ProfileUpdate
from lookin.services.catalog_service import LIFESTYLE_OPTIONS, INTEREST_OPTIONS
from lookin.utils.tags import toggle_tag, invalid_tags

logger = logging.getLogger(__name__)

TAG_OPTIONS = {
    "lifestyle": LIFESTYLE_OPTIONS,
    "interests": INTEREST_OPTIONS,
}


class ProfileService:
    """Service for profile operations."""

    @staticmethod
    def get_profile(db: Session, user: User) -> Optional[Profile]:
        """Get the user's own profile, None when it has not been created yet."""
        return db.query(Profile).filter(Profile.user_id == user.id).first()

    @staticmethod
    def upsert_profile(db: Session, user: User, profile_data: ProfileUpdate) -> Profile:
        """Create or update the user's profile."""
        update_data = profile_data.model_dump(exclude_unset=True)

        for field in ("lifestyle", "interests"):
            if field in update_data:
                ProfileService._check_tags(field, update_data[field])

        profile = ProfileService.get_profile(db, user)
        if profile is None:
            profile = Profile(
                user_id=user.id,
                name=user.full_name,
                profile_photo=user.avatar_url,
                lifestyle=[],
                interests=[]
            )
            db.add(profile)
            logger.info(f"Creating profile for user {user.id}")
        else:
            logger.info(f"Updating profile {profile.id} for user {user.id}")

        for field, value in update_data.items():
            setattr(profile, field, value)

        # Email always mirrors the account
        profile.email = user.email
        profile.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def toggle_profile_tag(db: Session, user: User, field: str, value: str) -> Profile:
        """Add or remove one lifestyle/interest tag on the user's profile."""
        ProfileService._check_tags(field, [value])

        profile = ProfileService.get_profile(db, user)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Profile not found"
            )

        # Reassign a new list so the JSON column is flagged dirty
        setattr(profile, field, toggle_tag(getattr(profile, field) or [], value))
        profile.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(profile)

        logger.debug(f"Toggled {field} tag '{value}' on profile {profile.id}")
        return profile

    @staticmethod
    def get_profile_by_user_id(db: Session, user_id: int) -> Profile:
        """Get any user's profile for the public profile view."""
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        if not profile:
            logger.warning(f"Profile for user {user_id} not found")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Profile not found"
            )
        return profile

    @staticmethod
    def get_users_by_location(db: Session, location: str, exclude_user_id: Optional[int] = None) -> List[Profile]:
        """Profiles whose location contains the query, case-insensitively, newest first.

        "Bangalore" matches "Koramangala, Bangalore".
        """
        location = (location or "").strip()
        if not location:
            return []

        query = db.query(Profile).filter(Profile.location.ilike(f"%{location}%"))
        if exclude_user_id is not None:
            query = query.filter(Profile.user_id != exclude_user_id)

        profiles = query.order_by(Profile.created_at.desc(), Profile.id.desc()).all()
        logger.debug(f"Found {len(profiles)} profile(s) matching location '{location}'")
        return profiles

    @staticmethod
    def display_name(db: Session, user_id: int) -> Optional[str]:
        """Name shown for a user: profile name, then account name."""
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        if profile and profile.name:
            return profile.name
        user = db.query(User).filter(User.id == user_id).first()
        return user.full_name if user else None

    @staticmethod
    def _check_tags(field: str, tags: List[str]):
        unknown = invalid_tags(tags, TAG_OPTIONS[field])
        if unknown:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown {field} option(s): {', '.join(unknown)}"
            )
