import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from lookin.database import get_db
from lookin.schemas import FindResponse, ProfileCard, ListingResponse
from lookin.services.find_service import FindService, FindFilters
from lookin.utils.security import get_current_user
from lookin.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/find", tags=["Find"])


@router.get("/", response_model=FindResponse)
async def find_matches(
    city_id: str = Query("", max_length=50),
    q: str = Query("", max_length=100),
    min_budget: Optional[int] = Query(None, ge=0),
    max_budget: Optional[int] = Query(None, ge=0),
    lifestyle: List[str] = Query([]),
    sort: str = Query("newest", pattern="^(newest|budget-low|budget-high)$"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Flatmates and rooms in the selected city, or in your profile location.

    - **city_id**: Selected city; falls back to your profile location
    - **q**: Search text
    - **min_budget** / **max_budget**: Budget range
    - **lifestyle**: Repeat to match any of several tags
    - **sort**: newest, budget-low or budget-high
    """
    filters = FindFilters(
        city_id=city_id,
        q=q,
        min_budget=min_budget,
        max_budget=max_budget,
        lifestyle=lifestyle,
        sort=sort,
    )
    logger.info(f"API request: Find for user {current_user.id} with {filters}")
    try:
        result = FindService.find(db, current_user, filters)
    except HTTPException as e:
        logger.error(f"API error: Find failed for user {current_user.id}: {e.status_code} - {e.detail}")
        raise

    logger.info(
        f"API response: {len(result.flatmates)} flatmate(s) and {len(result.rooms)} room(s) "
        f"in '{result.location}'"
    )
    return FindResponse(
        location=result.location,
        city_id=result.city_id,
        flatmates=[ProfileCard.from_orm(profile) for profile in result.flatmates],
        rooms=[ListingResponse.from_orm(room) for room in result.rooms],
    )
