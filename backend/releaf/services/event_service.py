"""Event service: request validation, formatting, creator-only writes and attendance."""
import logging
from datetime import datetime
from typing import Any, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload, selectinload

from releaf.models.event import Event, EventType
from releaf.models.user import User
from releaf.models.user_event import AttendanceStatus, UserEvent
from releaf.schemas.event import EventCreate, EventUpdate
from releaf.utils import ensure_utc, parse_datetime, to_number

logger = logging.getLogger(__name__)

VALID_ATTENDANCE_STATUSES = [s.value for s in AttendanceStatus]


def validate_event_request(data: EventCreate) -> list[str]:
    """Return every problem with an event payload; empty when valid."""
    errors = []
    if not data.title:
        errors.append("Title is required")
    if not data.date:
        errors.append("Date is required")

    if data.title and (len(data.title) < 3 or len(data.title) > 100):
        errors.append("Title must be between 3 and 100 characters")

    start = parse_datetime(data.date) if data.date else None
    if data.date and start is None:
        errors.append("Invalid date format")

    if data.end_date:
        end = parse_datetime(data.end_date)
        if end is None:
            errors.append("Invalid end date format")
        elif start is not None and end < start:
            errors.append("End date must be after start date")

    if data.duration is not None:
        duration = to_number(data.duration)
        if duration is None or duration <= 0:
            errors.append("Duration must be a positive number")

    if data.volunteers is not None:
        volunteers = to_number(data.volunteers)
        if volunteers is None or volunteers <= 0 or not volunteers.is_integer():
            errors.append("Volunteers must be a positive integer")

    return errors


def format_event(event: Event) -> dict[str, Any]:
    """Flatten an event with its type, creator and attendees for the API."""
    return {
        "id": event.id,
        "title": event.title,
        "date": ensure_utc(event.date),
        "end_date": ensure_utc(event.end_date),
        "location": event.location,
        "description": event.description,
        "duration": event.duration,
        "volunteers": event.volunteers,
        "type": event.type.name if event.type else None,
        "type_color": event.type.color if event.type else None,
        "created_by": event.created_by.name if event.created_by else None,
        "attendees": len(event.user_events),
        "attendees_list": [
            {"id": ue.user.id, "name": ue.user.name, "status": ue.status}
            for ue in event.user_events
        ],
    }


def _event_query(db: Session):
    return db.query(Event).options(
        joinedload(Event.type),
        joinedload(Event.created_by),
        selectinload(Event.user_events).joinedload(UserEvent.user),
    )


def get_event_or_404(db: Session, event_id: str) -> Event:
    event = _event_query(db).filter(Event.id == event_id).first()
    if not event:
        logger.warning("Event not found with ID: %s", event_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


def list_events(db: Session, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None) -> list[Event]:
    """All events by date; filtered to [start_date, end_date] only when both are given."""
    query = _event_query(db)
    if start_date and end_date:
        logger.info("Filtering events between %s and %s", start_date.isoformat(), end_date.isoformat())
        query = query.filter(Event.date >= start_date, Event.date <= end_date)
    return query.order_by(Event.date.asc()).all()


def _check_event_type(db: Session, type_id: Optional[str]) -> None:
    if type_id and not db.query(EventType).filter(EventType.id == type_id).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Event type not found")


def _int_or_none(value) -> Optional[int]:
    number = to_number(value) if value not in (None, "") else None
    return int(number) if number else None


def _raise_validation(errors: list[str], action: str) -> None:
    if errors:
        logger.warning("Validation failed for event %s: %s", action, errors)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Validation failed", "details": errors},
        )


def create_event(db: Session, payload: EventCreate, creator: User) -> Event:
    """Create an event; the creator is registered as attending."""
    _raise_validation(validate_event_request(payload), "creation")
    _check_event_type(db, payload.type_id)

    event = Event(
        title=payload.title,
        date=parse_datetime(payload.date),
        end_date=parse_datetime(payload.end_date) if payload.end_date else None,
        location=payload.location,
        description=payload.description,
        duration=_int_or_none(payload.duration),
        volunteers=_int_or_none(payload.volunteers),
        type_id=payload.type_id or None,
        created_by_id=creator.id,
    )
    db.add(event)
    db.flush()

    db.add(UserEvent(user_id=creator.id, event_id=event.id, status=AttendanceStatus.attending.value))
    db.commit()
    logger.info("Created new event: %s (ID: %s)", event.title, event.id)
    return get_event_or_404(db, event.id)


def _check_creator(event: Event, user: User, action: str) -> None:
    if event.created_by_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You do not have permission to {action} this event",
        )


def update_event(db: Session, event_id: str, payload: EventUpdate, user: User) -> Event:
    """Partial update; only the creator may edit."""
    event = get_event_or_404(db, event_id)
    _check_creator(event, user, "update")

    updates = payload.model_dump(exclude_unset=True)
    # Validate the merged event so partial payloads are checked against stored values
    merged = EventCreate(
        title=updates.get("title", event.title),
        date=updates.get("date") or event.date.isoformat(),
        end_date=updates.get("end_date", event.end_date.isoformat() if event.end_date else None),
        duration=updates.get("duration"),
        volunteers=updates.get("volunteers"),
    )
    _raise_validation(validate_event_request(merged), "update")
    _check_event_type(db, updates.get("type_id"))

    for field in ("title", "location", "description"):
        if field in updates:
            setattr(event, field, updates[field])
    if updates.get("date"):
        event.date = parse_datetime(updates["date"])
    if "end_date" in updates:
        event.end_date = parse_datetime(updates["end_date"]) if updates["end_date"] else None
    if updates.get("duration") is not None:
        event.duration = _int_or_none(updates["duration"])
    if updates.get("volunteers") is not None:
        event.volunteers = _int_or_none(updates["volunteers"])
    if updates.get("type_id"):
        event.type_id = updates["type_id"]

    db.commit()
    logger.info("Updated event %s", event_id)
    return get_event_or_404(db, event_id)


def delete_event(db: Session, event_id: str, user: User) -> None:
    """Delete an event and its attendance records; only the creator may delete."""
    event = get_event_or_404(db, event_id)
    _check_creator(event, user, "delete")

    # user_events cascade with the event
    db.delete(event)
    db.commit()
    logger.info("Deleted event %s", event_id)


def validate_attendance_status(value: str) -> None:
    if value not in VALID_ATTENDANCE_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status. Must be one of: {', '.join(VALID_ATTENDANCE_STATUSES)}",
        )


def set_attendance(db: Session, event_id: str, user: User, attendance_status: Optional[str]) -> dict[str, Any]:
    """Register the user for an event, or change an existing registration's status."""
    get_event_or_404(db, event_id)
    attendance_status = attendance_status or AttendanceStatus.attending.value
    validate_attendance_status(attendance_status)

    user_event = (
        db.query(UserEvent)
        .filter(UserEvent.user_id == user.id, UserEvent.event_id == event_id)
        .first()
    )
    if user_event:
        user_event.status = attendance_status
        verb = "updated"
    else:
        user_event = UserEvent(user_id=user.id, event_id=event_id, status=attendance_status)
        db.add(user_event)
        verb = "registered"
    db.commit()
    db.refresh(user_event)
    logger.info("User %s %s for event %s with status: %s", user.id, verb, event_id, attendance_status)

    return {
        "user_id": user_event.user_id,
        "event_id": user_event.event_id,
        "status": user_event.status,
        "added_at": user_event.added_at,
        "message": f"Successfully {verb} for the event.",
    }


def remove_attendance(db: Session, event_id: str, user: User) -> None:
    get_event_or_404(db, event_id)
    user_event = (
        db.query(UserEvent)
        .filter(UserEvent.user_id == user.id, UserEvent.event_id == event_id)
        .first()
    )
    if not user_event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="You are not registered for this event")
    db.delete(user_event)
    db.commit()
    logger.info("User %s removed attendance for event %s", user.id, event_id)
