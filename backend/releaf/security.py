"""Password hashing and session token signing."""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from releaf.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_token(user_id: str, email: str, name: Optional[str] = None) -> tuple[str, datetime]:
    """Sign a session token. Returns the token and its expiry."""
    now = datetime.now(timezone.utc)
    expires = now + timedelta(days=settings.SESSION_MAX_AGE_DAYS)
    payload = {
        "sub": str(user_id),
        "email": email,
        "name": name,
        "iat": now,
        "exp": expires,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM), expires


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """Return the token claims, or None if the signature or expiry is invalid."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
