"""Tests for error translation and the shared error body."""
from sqlalchemy.exc import IntegrityError

from releaf.errors import error_body, integrity_error_status


class _PgError(Exception):
    def __init__(self, pgcode):
        super().__init__("constraint violated")
        self.pgcode = pgcode


def test_error_body_shapes():
    assert error_body("Nope") == {"success": False, "error": "Nope"}
    assert error_body({"message": "Validation failed", "errors": ["x"]}) == {
        "success": False, "message": "Validation failed", "errors": ["x"],
    }


def test_sqlite_unique_violation_is_conflict():
    exc = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))
    status_code, detail = integrity_error_status(exc)
    assert status_code == 409


def test_sqlite_foreign_key_violation_is_bad_request():
    exc = IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))
    status_code, detail = integrity_error_status(exc)
    assert status_code == 400
    assert detail["error"] == "Foreign key constraint failed."


def test_postgres_codes():
    assert integrity_error_status(IntegrityError("INSERT", {}, _PgError("23505")))[0] == 409
    assert integrity_error_status(IntegrityError("INSERT", {}, _PgError("23503")))[0] == 400


def test_malformed_body_is_bad_request(client):
    resp = client.post("/api/donate", content="{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation failed"


def test_unknown_route_uses_error_body(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Not Found"}
