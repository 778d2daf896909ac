"""FastAPI application entry point."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from releaf.config import settings
from releaf.database import Base, engine
from releaf.errors import register_exception_handlers
from releaf.logging_setup import setup_logging
from releaf.middleware import SessionGateMiddleware

# Import routers
from releaf.routers import auth, donations, events, event_types, carbon, dashboard

# Import all models so Base.metadata knows about them
from releaf.models.user import User                # noqa: F401
from releaf.models.donation import Donation        # noqa: F401
from releaf.models.event import Event, EventType   # noqa: F401
from releaf.models.user_event import UserEvent     # noqa: F401

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="ReLeaf NI",
    description="Community tree-planting platform: events, donations, carbon calculator and user dashboard",
    version="0.1.0",
)

register_exception_handlers(app)

app.add_middleware(SessionGateMiddleware, protected_paths=settings.protected_paths)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(donations.router, prefix="/api", tags=["Donations"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(event_types.router, prefix="/api/event-types", tags=["EventTypes"])
app.include_router(carbon.router, prefix="/api/carbon-calculator", tags=["Carbon"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
