"""Donation recording and month-by-month donation history."""
import calendar
import logging
import re
from datetime import datetime
from typing import Iterable, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from releaf.models.donation import Donation, DonationStatus
from releaf.models.user import User
from releaf.schemas.donation import DonationCreate
from releaf.utils import ensure_utc, local_tz, to_number

logger = logging.getLogger(__name__)

DEFAULT_MONTHS = 6
MIN_MONTHS = 1
MAX_MONTHS = 24
LEADING_INT_RE = re.compile(r"\s*[+-]?\d+")


def parse_months(raw: Optional[str]) -> int:
    """Validate the `months` query parameter (1-24, default 6).

    Like a form's integer parse, only the leading digits count: "6abc" is 6
    and "3.5" is 3.
    """
    if raw is None or raw == "":
        return DEFAULT_MONTHS
    match = LEADING_INT_RE.match(raw)
    months = int(match.group()) if match else None
    if months is None or months < MIN_MONTHS or months > MAX_MONTHS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid 'months' parameter. Must be a number between {MIN_MONTHS} and {MAX_MONTHS}.",
        )
    return months


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _local_now(now: Optional[datetime] = None) -> datetime:
    tz = local_tz()
    if now is None:
        return datetime.now(tz)
    return ensure_utc(now).astimezone(tz)


def month_key(value: datetime) -> str:
    """Short month name of a timestamp in local time, e.g. "Mar"."""
    return calendar.month_abbr[ensure_utc(value).astimezone(local_tz()).month]


def calculate_start_date(months: int, now: Optional[datetime] = None) -> datetime:
    """First day of the month `months` months back, at local midnight."""
    local_now = _local_now(now)
    year, month = _shift_month(local_now.year, local_now.month, -months)
    return local_tz().localize(datetime(year, month, 1))


def aggregate_donations_by_month(
    donations: Iterable[Donation],
    months: int,
    now: Optional[datetime] = None,
) -> list[dict]:
    """Sum donation amounts per calendar month, oldest bucket first.

    Buckets are keyed by short month name only, with no year. With
    months > 12 the keys repeat, so the result holds at most 12 buckets and
    donations a year apart are added together. Callers relying on per-year
    figures must not use this for windows longer than a year.
    """
    local_now = _local_now(now)
    by_month: dict[str, float] = {}

    # Current month first; a repeated key keeps its first position
    for i in range(months):
        _, month = _shift_month(local_now.year, local_now.month, -i)
        by_month[calendar.month_abbr[month]] = 0

    for donation in donations:
        key = month_key(donation.created_at)
        if key in by_month:
            by_month[key] += donation.amount

    return [{"month": month, "amount": amount} for month, amount in reversed(list(by_month.items()))]


def donation_history(db: Session, email: str, months: int, now: Optional[datetime] = None) -> dict:
    """Monthly donation breakdown and total for one donor email."""
    start_date = calculate_start_date(months, now)
    donations = (
        db.query(Donation)
        .filter(Donation.email == email, Donation.created_at >= ensure_utc(start_date))
        .order_by(Donation.created_at.asc())
        .all()
    )
    logger.info("Found %d donations for user %s since %s", len(donations), email, start_date.isoformat())

    return {
        "donations": aggregate_donations_by_month(donations, months, now),
        "total": sum(d.amount for d in donations),
    }


def create_donation(
    db: Session,
    payload: DonationCreate,
    donation_status: DonationStatus,
    user: Optional[User] = None,
    missing_fields_message: str = "Missing required fields",
) -> Donation:
    """Validate and store a donation, optionally linked to a signed-in user."""
    if not payload.name or not payload.email or not payload.amount:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=missing_fields_message)

    amount = to_number(payload.amount)
    if amount is None or amount <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Amount must be a positive number")

    donation = Donation(
        name=payload.name,
        email=payload.email,
        amount=amount,
        message=payload.message or "",
        status=donation_status.value,
        user_id=user.id if user else None,
    )
    db.add(donation)
    db.commit()
    db.refresh(donation)
    logger.info("Recorded %s donation %s of %.2f from %s", donation.status, donation.id, amount, donation.email)
    return donation
