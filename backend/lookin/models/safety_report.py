from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from datetime import datetime
from lookin.database import Base


class SafetyReport(Base):
    """User-submitted report about another user or the platform."""

    __tablename__ = "safety_reports"

    id = Column(Integer, primary_key=True, index=True)
    reporter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    reported_user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    reason = Column(String(100), nullable=False)
    details = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<SafetyReport {self.id} by User {self.reporter_id}>"
