"""Tests for donation endpoints and month-by-month donation history."""
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from releaf.models.donation import Donation
from releaf.services.donation_service import (
    _shift_month,
    aggregate_donations_by_month,
    calculate_start_date,
    month_key,
)
from releaf.utils import ensure_utc, local_tz
from tests.conftest import create_signed_in_user

FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _local_mid_month(months_back: int, day: int = 15) -> datetime:
    """Noon local time on `day` of the month `months_back` months before today."""
    now = datetime.now(local_tz())
    year, month = _shift_month(now.year, now.month, -months_back)
    return local_tz().localize(datetime(year, month, day, 12, 0))


def _add_donation(db, email: str, amount: float, created_at: datetime, **kwargs) -> Donation:
    donation = Donation(name="Test User", email=email, amount=amount, status="completed",
                        created_at=ensure_utc(created_at), **kwargs)
    db.add(donation)
    db.commit()
    return donation


class TestDonate:
    """POST /api/donate (public form) and POST /api/donations."""

    def test_donate_echoes_fields(self, client):
        resp = client.post("/api/donate", json={
            "amount": 100,
            "email": "test@example.com",
            "name": "Test User",
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["success"] is True
        assert data["donation"]["name"] == "Test User"
        assert data["donation"]["amount"] == 100
        assert data["donation"]["email"] == "test@example.com"
        assert data["donation"]["status"] == "completed"
        assert data["donation"]["message"] == ""

    def test_donate_parses_string_amount(self, client):
        resp = client.post("/api/donate", json={"amount": "25.50", "email": "a@b.co", "name": "A"})
        assert resp.status_code == 201
        assert resp.json()["donation"]["amount"] == pytest.approx(25.5)

    def test_donate_missing_fields(self, client):
        resp = client.post("/api/donate", json={"name": "Test User", "email": "test@example.com"})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Missing required fields"}

    def test_donate_invalid_amount(self, client):
        resp = client.post("/api/donate", json={"amount": "lots", "email": "a@b.co", "name": "A"})
        assert resp.status_code == 400

    @pytest.mark.parametrize("amount", ["Infinity", "1e309", "NaN"])
    def test_donate_non_finite_amount(self, client, db, amount):
        resp = client.post("/api/donate", json={"amount": amount, "email": "a@b.co", "name": "A"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Amount must be a positive number"
        assert db.query(Donation).count() == 0

    def test_donations_links_signed_in_user(self, client):
        user, headers = create_signed_in_user(client)
        resp = client.post("/api/donations", headers=headers, json={
            "amount": 40, "email": "test@example.com", "name": "Test User", "message": "For the trees",
        })
        assert resp.status_code == 201
        donation = resp.json()["donation"]
        assert donation["status"] == "pending"
        assert donation["user_id"] == user["id"]
        assert donation["message"] == "For the trees"

    def test_donations_anonymous(self, client):
        resp = client.post("/api/donations", json={"amount": 10, "email": "anon@example.com", "name": "Anon"})
        assert resp.status_code == 201
        assert resp.json()["donation"]["user_id"] is None

    def test_donations_missing_fields(self, client):
        resp = client.post("/api/donations", json={"amount": 10})
        assert resp.status_code == 400
        assert "name, email, and amount are required" in resp.json()["error"]


class TestDonationHistory:
    """GET /api/donations/user."""

    def test_two_months_of_donations(self, client, db):
        _, headers = create_signed_in_user(client)
        last_month = _local_mid_month(1)
        three_back = _local_mid_month(3, day=10)
        _add_donation(db, "test@example.com", 100, last_month)
        _add_donation(db, "test@example.com", 50, three_back)
        _add_donation(db, "someone@else.com", 999, last_month)

        resp = client.get("/api/donations/user?months=6", headers=headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 150
        assert len(data["donations"]) == 6

        amounts = {d["month"]: d["amount"] for d in data["donations"]}
        assert amounts[month_key(last_month)] == 100
        assert amounts[month_key(three_back)] == 50
        assert sum(1 for d in data["donations"] if d["amount"]) == 2
        # Chronological: the current month is last
        assert data["donations"][-1]["month"] == month_key(datetime.now(timezone.utc))

    def test_default_window_is_six_months(self, client):
        _, headers = create_signed_in_user(client)
        resp = client.get("/api/donations/user", headers=headers)
        assert resp.status_code == 200
        assert len(resp.json()["donations"]) == 6
        assert resp.json()["total"] == 0

    @pytest.mark.parametrize("months", ["0", "25", "abc", "-3", "x6"])
    def test_invalid_months(self, client, months):
        _, headers = create_signed_in_user(client)
        resp = client.get(f"/api/donations/user?months={months}", headers=headers)
        assert resp.status_code == 400
        assert "between 1 and 24" in resp.json()["error"]

    @pytest.mark.parametrize("months,expected", [("6abc", 6), ("3.5", 3), (" 12", 12)])
    def test_months_takes_leading_integer(self, client, months, expected):
        _, headers = create_signed_in_user(client)
        resp = client.get("/api/donations/user", params={"months": months}, headers=headers)
        assert resp.status_code == 200
        assert len(resp.json()["donations"]) == expected

    def test_requires_authentication(self, client):
        resp = client.get("/api/donations/user")
        assert resp.status_code == 401


class TestMonthBuckets:
    """Start date and bucketing, with a fixed clock."""

    def test_start_date_is_first_of_month(self):
        start = calculate_start_date(6, FIXED_NOW)
        assert (start.year, start.month, start.day, start.hour, start.minute) == (2026, 4, 1, 0, 0)
        assert start.tzinfo.zone == "Europe/London"

    def test_start_date_crosses_year(self):
        start = calculate_start_date(1, datetime(2026, 1, 10, tzinfo=timezone.utc))
        assert (start.year, start.month, start.day) == (2025, 12, 1)

    def test_buckets_are_chronological(self):
        result = aggregate_donations_by_month([], 3, FIXED_NOW)
        assert result == [
            {"month": "Aug", "amount": 0},
            {"month": "Sep", "amount": 0},
            {"month": "Oct", "amount": 0},
        ]

    def test_donation_outside_buckets_is_not_bucketed(self):
        # The query window starts a month before the oldest bucket
        april = SimpleNamespace(amount=30, created_at=datetime(2026, 4, 10, 12, tzinfo=timezone.utc))
        result = aggregate_donations_by_month([april], 6, FIXED_NOW)
        assert [r["month"] for r in result] == ["May", "Jun", "Jul", "Aug", "Sep", "Oct"]
        assert all(r["amount"] == 0 for r in result)

    def test_same_month_a_year_apart_collides(self):
        donations = [
            SimpleNamespace(amount=10, created_at=datetime(2025, 3, 5, 12, tzinfo=timezone.utc)),
            SimpleNamespace(amount=20, created_at=datetime(2026, 3, 5, 12, tzinfo=timezone.utc)),
        ]
        result = aggregate_donations_by_month(donations, 24, FIXED_NOW)
        assert len(result) == 12
        assert {r["month"]: r["amount"] for r in result}["Mar"] == 30
        assert result[-1]["month"] == "Oct"

    def test_naive_timestamps_are_utc(self):
        # 23:30 UTC on 31 Aug is 00:30 on 1 Sep in London (BST)
        late = SimpleNamespace(amount=5, created_at=datetime(2026, 8, 31, 23, 30))
        result = aggregate_donations_by_month([late], 3, FIXED_NOW)
        assert {r["month"]: r["amount"] for r in result} == {"Aug": 0, "Sep": 5, "Oct": 0}
