"""Database models."""

from lookin.models.user import User
from lookin.models.profile import Profile
from lookin.models.conversation import Conversation
from lookin.models.message import Message
from lookin.models.room_listing import RoomListing
from lookin.models.safety_report import SafetyReport

__all__ = [
    "User",
    "Profile",
    "Conversation",
    "Message",
    "RoomListing",
    "SafetyReport",
]
