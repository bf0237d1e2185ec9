from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from lookin.database import Base


class RoomListing(Base):
    """A posted room advertisement with pricing and amenities."""

    __tablename__ = "room_listings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    city_id = Column(String(50), default="", index=True)
    city_name = Column(String(100), default="")
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    room_type = Column(String(50), nullable=True)
    rent = Column(Integer, default=0)
    deposit = Column(Integer, default=0)
    available_from = Column(String(20), nullable=True)
    amenities = Column(JSON, default=list)
    flatmate_preferences = Column(JSON, default=list)
    house_rules = Column(JSON, default=list)
    image_urls = Column(JSON, default=list)
    is_active = Column(Boolean, default=True, index=True)
    views = Column(Integer, default=0, nullable=False)
    inquiries = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="listings")

    def __repr__(self):
        return f"<RoomListing {self.id} '{self.title}'>"
