"""Donation ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, Float, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from releaf.database import Base


class DonationStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"


class Donation(Base):
    __tablename__ = "donations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    message = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=DonationStatus.pending.value)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="donations")
