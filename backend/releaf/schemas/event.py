"""Pydantic schemas for Events, attendance and the activity feed."""
from __future__ import annotations
from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel

Number = Union[int, float, str]


class EventCreate(BaseModel):
    # Loosely typed: validate_event_request produces the field errors
    title: Optional[str] = None
    date: Optional[str] = None
    end_date: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[Number] = None
    volunteers: Optional[Number] = None
    type_id: Optional[str] = None


class EventUpdate(EventCreate):
    pass


class AttendeeOut(BaseModel):
    id: str
    name: Optional[str] = None
    status: str


class EventOut(BaseModel):
    id: str
    title: str
    date: datetime
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = None
    volunteers: Optional[int] = None
    type: Optional[str] = None
    type_color: Optional[str] = None
    created_by: Optional[str] = None
    attendees: int = 0
    attendees_list: list[AttendeeOut] = []


class AttendanceRequest(BaseModel):
    status: Optional[str] = None


class AttendanceOut(BaseModel):
    user_id: str
    event_id: str
    status: str
    added_at: Optional[datetime] = None
    message: str


class Activity(BaseModel):
    id: str
    type: str
    description: str
    date: datetime
    status: Optional[str] = None
    event_type: Optional[str] = None
    event_color: Optional[str] = None
    amount: Optional[float] = None


class ActivityFeed(BaseModel):
    activities: list[Activity]
    activities_this_month: int
    total_activities: int
