import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from lookin.database import get_db
from lookin.schemas import SafetyInfo, ReportCreate, ReportResponse
from lookin.services.safety_service import SafetyService
from lookin.utils.security import get_current_user
from lookin.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/safety", tags=["Safety"])


@router.get("/", response_model=SafetyInfo)
async def get_safety_info():
    """Safety features, tips and the reasons a report can be filed for."""
    return SafetyService.get_info()


@router.post("/reports", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def submit_report(
    report_data: ReportCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Report a user or an incident to the moderation team.

    - **reason**: One of the report reasons from the safety info
    - **reported_user_id**: Optional user being reported
    """
    try:
        report = SafetyService.submit_report(db, report_data, current_user)
        return ReportResponse.from_orm(report)
    except HTTPException as e:
        logger.error(f"API error: Report by user {current_user.id} rejected: {e.status_code} - {e.detail}")
        raise
