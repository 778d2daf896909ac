"""Datetime and number helpers shared by the services."""
import math
from datetime import datetime
from typing import Any, Optional

import pytz

from releaf.config import settings


def local_tz():
    return pytz.timezone(settings.TIMEZONE)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (as SQLite returns them) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 date or datetime string. Returns None when unparseable."""
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def to_number(value: Any) -> Optional[float]:
    """Loose numeric coercion for form values. Returns None for non-numbers and NaN/infinity."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value if isinstance(value, (int, float)) else str(value).strip())
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def isoformat(value: Optional[datetime]) -> Optional[str]:
    value = ensure_utc(value)
    return value.isoformat() if value else None
