"""Tests for settings defaults."""
from sqlalchemy.engine import make_url

from releaf.config import Settings


def test_default_database_url_names_installed_driver():
    url = make_url(Settings.model_fields["DATABASE_URL"].default)
    assert url.get_backend_name() == "postgresql"
    assert url.get_driver_name() == "psycopg2"


def test_database_url_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")
    assert Settings().DATABASE_URL == "sqlite:///./other.db"
