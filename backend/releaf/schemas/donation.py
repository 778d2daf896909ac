"""Pydantic schemas for donations and donation history."""
from __future__ import annotations
from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel


class DonationCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    amount: Optional[Union[float, str]] = None
    message: Optional[str] = None


class DonationOut(BaseModel):
    id: str
    name: str
    email: str
    amount: float
    message: Optional[str] = None
    status: str
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class DonationCreated(BaseModel):
    success: bool = True
    donation: DonationOut


class MonthlyDonation(BaseModel):
    month: str
    amount: float


class DonationHistory(BaseModel):
    donations: list[MonthlyDonation]
    total: float
