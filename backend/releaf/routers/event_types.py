"""Event type API routes."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from releaf.database import get_db
from releaf.models.event import EventType
from releaf.schemas.event_type import EventTypeOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[EventTypeOut])
def list_event_types(db: Session = Depends(get_db)):
    """All event types ordered by name."""
    event_types = db.query(EventType).order_by(EventType.name.asc()).all()
    logger.info("Retrieved %d event types", len(event_types))
    return event_types
