"""Request dependencies resolving the signed-in user."""
import logging
from typing import Any, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from releaf.config import settings
from releaf.database import get_db
from releaf.models.user import User
from releaf.security import decode_token

logger = logging.getLogger(__name__)


def extract_token(request: Request) -> Optional[str]:
    """Session token from the Authorization header, falling back to the session cookie."""
    authorization = request.headers.get("authorization")
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip()
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_session_claims(request: Request) -> Optional[dict[str, Any]]:
    token = extract_token(request)
    if not token:
        return None
    return decode_token(token)


def require_session(claims: Optional[dict] = Depends(get_session_claims)) -> dict[str, Any]:
    if not claims or not claims.get("email"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return claims


def get_current_user(
    claims: dict = Depends(require_session),
    db: Session = Depends(get_db),
) -> User:
    """The session's user; 401 without a session, 404 if the account is gone."""
    user = db.query(User).filter(User.email == claims["email"]).first()
    if not user:
        logger.warning("User not found for email: %s", claims["email"])
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found in the database")
    return user


def get_optional_user(
    claims: Optional[dict] = Depends(get_session_claims),
    db: Session = Depends(get_db),
) -> Optional[User]:
    if not claims or not claims.get("email"):
        return None
    return db.query(User).filter(User.email == claims["email"]).first()
