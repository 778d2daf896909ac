"""Credential checks for signup and signin.

`authorize` is the credentials provider: it never raises for a bad login,
it returns None and logs why, so callers only distinguish "user" from
"no user". Token signing lives in `releaf.security`.
"""
import logging
import re
from typing import Optional

from sqlalchemy.orm import Session

from releaf.models.user import User
from releaf.security import verify_password

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SPECIAL_CHARS_RE = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def _log_auth_attempt(email: str, success: bool, reason: Optional[str] = None) -> None:
    if success:
        logger.info("Successful authentication for user: %s", email)
    else:
        logger.warning("Failed authentication attempt for email: %s, reason: %s", email, reason or "Unknown")


def authorize(db: Session, email: Optional[str], password: Optional[str]) -> Optional[dict]:
    """Validate email/password; return `{id, name, email}` or None."""
    try:
        email = email.strip() if email else email
        if not email or not password:
            _log_auth_attempt(email or "unknown", False, "Missing credentials")
            return None

        if not is_valid_email(email):
            _log_auth_attempt(email, False, "Invalid email format")
            return None

        user = db.query(User).filter(User.email == email.lower()).first()
        if not user:
            _log_auth_attempt(email, False, "User not found")
            return None

        if not user.password_hash:
            _log_auth_attempt(email, False, "User has no password (possibly OAuth account)")
            return None

        if not verify_password(password, user.password_hash):
            _log_auth_attempt(email, False, "Invalid password")
            return None

        _log_auth_attempt(email, True)
        return {"id": str(user.id), "name": user.name, "email": user.email}
    except Exception:
        logger.exception("Authentication error for email: %s", email)
        return None


def validate_registration_data(name: Optional[str], email: Optional[str], password: Optional[str]) -> list[str]:
    """Return every problem with a signup payload; empty when valid."""
    errors = []

    if not name or not name.strip():
        errors.append("Name is required")
    elif len(name.strip()) < 2:
        errors.append("Name must be at least 2 characters long")

    if not email or not email.strip():
        errors.append("Email is required")
    elif not is_valid_email(email.strip()):
        errors.append("Please provide a valid email address")

    if not password:
        errors.append("Password is required")
    elif len(password) < 8:
        errors.append("Password must be at least 8 characters long")
    else:
        has_upper = any(c.isupper() for c in password)
        has_lower = any(c.islower() for c in password)
        has_digit = any(c.isdigit() for c in password)
        has_special = bool(SPECIAL_CHARS_RE.search(password))
        if not (has_upper and has_lower and (has_digit or has_special)):
            errors.append("Password must contain uppercase, lowercase, and either numbers or special characters")

    return errors
