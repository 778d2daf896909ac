"""Pydantic schemas for event types."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class EventTypeOut(BaseModel):
    id: str
    name: str
    color: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
