from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from lookin.database import Base


class Profile(Base):
    """Flatmate-search attributes of a user (location, budget, lifestyle)."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True)
    name = Column(String(100), nullable=True)
    age = Column(Integer, nullable=True)
    phone = Column(String(30), nullable=True)
    location = Column(String(200), nullable=True, index=True)
    occupation = Column(String(100), nullable=True)
    company = Column(String(100), nullable=True)
    bio = Column(Text, nullable=True)
    budget = Column(Integer, nullable=True)
    move_in_date = Column(String(20), nullable=True)
    room_type = Column(String(50), default="Single room")
    lifestyle = Column(JSON, default=list)
    interests = Column(JSON, default=list)
    profile_photo = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="profile")

    def __repr__(self):
        return f"<Profile {self.id} of User {self.user_id}>"
