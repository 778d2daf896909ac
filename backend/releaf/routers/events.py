"""Event API routes: listing, creator-only writes, attendance and the user activity feed."""
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from releaf.database import get_db
from releaf.deps import get_current_user
from releaf.models.user import User
from releaf.schemas.event import (
    ActivityFeed,
    AttendanceOut,
    AttendanceRequest,
    EventCreate,
    EventOut,
    EventUpdate,
)
from releaf.services import activity_service, event_service
from releaf.utils import ensure_utc

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[EventOut])
def list_events(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
):
    """List events by date; pass both start_date and end_date to filter."""
    events = event_service.list_events(db, ensure_utc(start_date), ensure_utc(end_date))
    logger.info("Retrieved %d events", len(events))
    return [event_service.format_event(e) for e in events]


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create an event; the creator is registered as attending."""
    event = event_service.create_event(db, payload, user)
    return event_service.format_event(event)


@router.get("/user", response_model=ActivityFeed)
def user_activities(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Recent registrations, created events and donations of the signed-in user."""
    return activity_service.user_activities(db, user)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    return event_service.format_event(event_service.get_event_or_404(db, event_id))


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partial update (creator only)."""
    return event_service.format_event(event_service.update_event(db, event_id, payload, user))


@router.delete("/{event_id}")
def delete_event(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Delete an event and its attendance records (creator only)."""
    event_service.delete_event(db, event_id, user)
    return {"success": True}


@router.post("/{event_id}/attend", response_model=AttendanceOut)
def attend_event(
    event_id: str,
    payload: Optional[AttendanceRequest] = Body(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Register for an event or change attendance status (defaults to attending)."""
    return event_service.set_attendance(db, event_id, user, payload.status if payload else None)


@router.delete("/{event_id}/attend")
def unattend_event(event_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    event_service.remove_attendance(db, event_id, user)
    return {"success": True, "message": "Successfully removed from the event"}
