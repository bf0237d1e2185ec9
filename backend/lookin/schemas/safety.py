"""Schemas for the safety centre."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List


class SafetyFeature(BaseModel):
    title: str
    description: str
    status: str


class SafetyTipSection(BaseModel):
    category: str
    tips: List[str]


class SafetyInfo(BaseModel):
    features: List[SafetyFeature]
    tips: List[SafetyTipSection]
    report_reasons: List[str]


class ReportCreate(BaseModel):
    """Schema for reporting a user or an incident."""
    reported_user_id: Optional[int] = None
    reason: str = Field(..., min_length=1, max_length=100)
    details: Optional[str] = Field(None, max_length=2000)


class ReportResponse(BaseModel):
    id: int
    reporter_id: int
    reported_user_id: Optional[int] = None
    reason: str
    details: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
