"""Donation API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from releaf.database import get_db
from releaf.deps import get_current_user, get_optional_user
from releaf.models.donation import DonationStatus
from releaf.models.user import User
from releaf.schemas.donation import DonationCreate, DonationCreated, DonationHistory, DonationOut
from releaf.services import donation_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/donate", response_model=DonationCreated, status_code=status.HTTP_201_CREATED)
def donate(payload: DonationCreate, db: Session = Depends(get_db)):
    """Record a completed donation from the public donation form."""
    donation = donation_service.create_donation(db, payload, DonationStatus.completed)
    return {"success": True, "donation": DonationOut.model_validate(donation)}


@router.post("/donations", response_model=DonationCreated, status_code=status.HTTP_201_CREATED)
def create_donation(
    payload: DonationCreate,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """Record a pending donation, linked to the signed-in user if there is one."""
    donation = donation_service.create_donation(
        db,
        payload,
        DonationStatus.pending,
        user=user,
        missing_fields_message="Missing required fields: name, email, and amount are required",
    )
    return {"success": True, "donation": DonationOut.model_validate(donation)}


@router.get("/donations/user", response_model=DonationHistory)
def donation_history(
    months: Optional[str] = Query(None, description="Months of history, 1-24"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Month-by-month donation totals for the signed-in user."""
    month_count = donation_service.parse_months(months)
    logger.info("Fetching donation history for user: %s, months: %d", user.email, month_count)
    return donation_service.donation_history(db, user.email, month_count)
