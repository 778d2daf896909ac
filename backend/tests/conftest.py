"""Pytest fixtures: file-backed SQLite database, recreated for every test."""
import os

# Must be set before releaf.database builds its engine at import
SQLITE_URL = "sqlite:///./test.db"
os.environ.setdefault("DATABASE_URL", SQLITE_URL)

import pytest  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from releaf.database import Base, get_db  # noqa: E402
from releaf.main import app  # noqa: E402

# Import all models so they register with Base.metadata
from releaf.models.user import User                # noqa: F401
from releaf.models.donation import Donation        # noqa: F401
from releaf.models.event import Event, EventType   # noqa: F401
from releaf.models.user_event import UserEvent     # noqa: F401

DEFAULT_PASSWORD = "Secret123"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session for arranging and inspecting rows directly."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, name: str = "Test User", email: str = "test@example.com",
                     password: str = DEFAULT_PASSWORD) -> dict:
    """Helper: POST /api/auth/signup and return the created user."""
    resp = client.post("/api/auth/signup", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()["user"]


def signin(client: TestClient, email: str = "test@example.com", password: str = DEFAULT_PASSWORD) -> dict:
    """Helper: sign in and return Authorization headers for the session token."""
    resp = client.post("/api/auth/signin", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def create_signed_in_user(client: TestClient, name: str = "Test User",
                          email: str = "test@example.com") -> tuple[dict, dict]:
    """Helper: sign up then sign in; returns (user, headers)."""
    user = create_test_user(client, name=name, email=email)
    return user, signin(client, email=email)


def create_event_type(db, name: str = "Tree Planting", color: str = "bg-green-100") -> EventType:
    event_type = EventType(name=name, color=color)
    db.add(event_type)
    db.commit()
    db.refresh(event_type)
    return event_type
