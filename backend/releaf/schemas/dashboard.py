"""Pydantic schema for the dashboard summary."""
from pydantic import BaseModel

from releaf.schemas.donation import DonationHistory
from releaf.schemas.event import ActivityFeed


class DashboardOut(BaseModel):
    donations: DonationHistory
    activity: ActivityFeed
    impact_points: float
