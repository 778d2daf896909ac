"""Authentication API routes: signup, credential signin and session lookup."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from releaf.config import settings
from releaf.database import get_db
from releaf.deps import require_session
from releaf.models.user import User
from releaf.schemas.auth import SessionOut, SigninRequest, SignupRequest, SignupResponse, TokenOut
from releaf.security import create_token, hash_password
from releaf.services import auth_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    """Create an account with a bcrypt-hashed password."""
    errors = auth_service.validate_registration_data(payload.name, payload.email, payload.password)
    if errors:
        logger.warning("Registration validation failed: %s", errors)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Validation failed", "errors": errors},
        )

    name = payload.name.strip()
    email = payload.email.strip().lower()

    if db.query(User).filter(User.email == email).first():
        logger.warning("Registration attempt with existing email: %s", email)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": "User with this email already exists"},
        )

    user = User(name=name, email=email, password_hash=hash_password(payload.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Concurrent registration for email: %s", email)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": "A user with this information already exists"},
        )
    db.refresh(user)
    logger.info("User created successfully: %s (ID: %s)", email, user.id)
    return {
        "success": True,
        "user": {"id": user.id, "name": user.name, "email": user.email},
        "message": "User created successfully",
    }


@router.post("/signin", response_model=TokenOut)
def signin(payload: SigninRequest, response: Response, db: Session = Depends(get_db)):
    """Check credentials and issue a session token (body + http-only cookie)."""
    user = auth_service.authorize(db, payload.email, payload.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    token, expires = create_token(user["id"], user["email"], user["name"])
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return {"access_token": token, "token_type": "bearer", "expires": expires, "user": user}


@router.get("/session", response_model=SessionOut)
def get_session(claims: dict = Depends(require_session)):
    """The signed-in user as carried by the session token."""
    return {
        "user": {"id": claims["sub"], "name": claims.get("name"), "email": claims["email"]},
        "expires": claims["exp"],
    }


@router.post("/signout")
def signout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"success": True}
