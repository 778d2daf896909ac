"""Pydantic schemas for signup, signin and sessions."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class SignupRequest(BaseModel):
    # Left loose so validate_registration_data can report every problem at once
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class SigninRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class SessionUser(BaseModel):
    id: str
    name: Optional[str] = None
    email: str

    model_config = {"from_attributes": True}


class SignupResponse(BaseModel):
    success: bool = True
    user: SessionUser
    message: str = "User created successfully"


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires: datetime
    user: SessionUser


class SessionOut(BaseModel):
    user: SessionUser
    expires: datetime
