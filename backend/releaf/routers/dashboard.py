"""Dashboard summary route (gated by the session middleware)."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from releaf.database import get_db
from releaf.deps import get_current_user
from releaf.models.user import User
from releaf.schemas.dashboard import DashboardOut
from releaf.services import activity_service, donation_service

logger = logging.getLogger(__name__)
router = APIRouter()

POINTS_PER_ACTIVITY = 5


@router.get("", response_model=DashboardOut)
def dashboard(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Donation history, recent activity and impact points for the signed-in user."""
    donations = donation_service.donation_history(db, user.email, donation_service.DEFAULT_MONTHS)
    activity = activity_service.user_activities(db, user)
    impact_points = donations["total"] + activity["total_activities"] * POINTS_PER_ACTIVITY
    logger.info("Dashboard for user %s: %.2f impact points", user.id, impact_points)
    return {"donations": donations, "activity": activity, "impact_points": impact_points}
