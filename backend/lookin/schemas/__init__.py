"""Pydantic schemas for request and response bodies."""

from lookin.schemas.user import (
    UserCreate,
    UserLogin,
    UserResponse,
    EmailConfirm,
    ResendConfirmation,
    Token,
    SignUpResponse,
)
from lookin.schemas.profile import ProfileUpdate, ProfileResponse, ProfileCard, TagToggle
from lookin.schemas.listing import ListingCreate, ListingUpdate, ListingResponse, ListingStats
from lookin.schemas.message import MessageCreate, MessageResponse, WSMessage
from lookin.schemas.conversation import ConversationCreate, ConversationResponse
from lookin.schemas.catalog import City, Purpose, Amenity, Options
from lookin.schemas.safety import SafetyInfo, ReportCreate, ReportResponse
from lookin.schemas.find import FindResponse

__all__ = [
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "EmailConfirm",
    "ResendConfirmation",
    "Token",
    "SignUpResponse",
    "ProfileUpdate",
    "ProfileResponse",
    "ProfileCard",
    "TagToggle",
    "ListingCreate",
    "ListingUpdate",
    "ListingResponse",
    "ListingStats",
    "MessageCreate",
    "MessageResponse",
    "WSMessage",
    "ConversationCreate",
    "ConversationResponse",
    "City",
    "Purpose",
    "Amenity",
    "Options",
    "SafetyInfo",
    "ReportCreate",
    "ReportResponse",
    "FindResponse",
]
