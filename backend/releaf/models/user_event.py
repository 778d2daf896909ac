"""UserEvent ORM model: a user's attendance status for an event."""
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from releaf.database import Base


class AttendanceStatus(str, enum.Enum):
    attending = "attending"
    maybe = "maybe"
    not_attending = "not_attending"
    waitlist = "waitlist"


class UserEvent(Base):
    __tablename__ = "user_events"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), primary_key=True)
    status = Column(String(20), nullable=False, default=AttendanceStatus.attending.value)
    added_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="user_events")
    event = relationship("Event", back_populates="user_events")
