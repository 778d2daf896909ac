"""User activity feed: event registrations, created events and donations, newest first."""
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.orm import Session, joinedload

from releaf.models.donation import Donation
from releaf.models.event import Event
from releaf.models.user import User
from releaf.models.user_event import UserEvent
from releaf.utils import ensure_utc, local_tz

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10
DEFAULT_EVENT_TYPE = "Event"
DEFAULT_EVENT_COLOR = "bg-gray-100"


def _format_registration(user_event: UserEvent) -> dict[str, Any]:
    event = user_event.event
    return {
        "id": f"event-{user_event.event_id}",
        "type": "Event Registration",
        "description": f"Registered for {event.title}",
        "date": ensure_utc(user_event.added_at),
        "status": user_event.status,
        "event_type": event.type.name if event.type else DEFAULT_EVENT_TYPE,
        "event_color": event.type.color if event.type else DEFAULT_EVENT_COLOR,
    }


def _format_created_event(event: Event) -> dict[str, Any]:
    return {
        "id": f"created-{event.id}",
        "type": "Event Creation",
        "description": f"Created event: {event.title}",
        "date": ensure_utc(event.created_at),
        "event_type": event.type.name if event.type else DEFAULT_EVENT_TYPE,
        "event_color": event.type.color if event.type else DEFAULT_EVENT_COLOR,
    }


def _format_amount(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else f"{amount:.2f}"


def _format_donation(donation: Donation) -> dict[str, Any]:
    description = f"Donated £{_format_amount(donation.amount)}"
    if donation.message:
        description += f' - "{donation.message}"'
    return {
        "id": f"donation-{donation.id}",
        "type": "Donation",
        "description": description,
        "date": ensure_utc(donation.created_at),
        "amount": donation.amount,
    }


def count_activities_this_month(activities: list[dict], now: Optional[datetime] = None) -> int:
    """Activities dated on or after the first of the current local month."""
    tz = local_tz()
    local_now = datetime.now(tz) if now is None else ensure_utc(now).astimezone(tz)
    start_of_month = tz.localize(datetime(local_now.year, local_now.month, 1))
    return sum(1 for a in activities if a["date"] >= start_of_month)


def user_activities(db: Session, user: User, now: Optional[datetime] = None) -> dict[str, Any]:
    """The user's ten most recent activities plus monthly and overall counts."""
    registrations = (
        db.query(UserEvent)
        .options(joinedload(UserEvent.event).joinedload(Event.type))
        .filter(UserEvent.user_id == user.id)
        .order_by(UserEvent.added_at.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    created_events = (
        db.query(Event)
        .options(joinedload(Event.type))
        .filter(Event.created_by_id == user.id)
        .order_by(Event.created_at.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    donations = (
        db.query(Donation)
        .filter(Donation.user_id == user.id)
        .order_by(Donation.created_at.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    logger.info(
        "Retrieved %d registrations, %d created events, %d donations for user %s",
        len(registrations), len(created_events), len(donations), user.id,
    )

    activities = (
        [_format_registration(ue) for ue in registrations]
        + [_format_created_event(e) for e in created_events]
        + [_format_donation(d) for d in donations]
    )
    activities.sort(key=lambda a: a["date"], reverse=True)

    return {
        "activities": activities[:RECENT_LIMIT],
        "activities_this_month": count_activities_this_month(activities, now),
        "total_activities": len(activities),
    }
