"""Tests for error types, integrity error classification and handlers."""

from sqlalchemy.exc import IntegrityError, OperationalError

from biztime.core.db import classify_integrity_error
from biztime.core.errors import (
    BizTimeError,
    ConflictError,
    NotFoundError,
    StorageError,
)
from biztime.services import company_service


class FakeDriverError(Exception):
    def __init__(self, message="", pgcode=None, sqlstate=None):
        super().__init__(message)
        self.pgcode = pgcode
        self.sqlstate = sqlstate


def _integrity(orig) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, orig)


def test_error_statuses():
    assert NotFoundError("x").http_status == 404
    assert ConflictError("x").http_status == 409
    assert StorageError("x").http_status == 500
    assert BizTimeError("x", http_status=418).http_status == 418


def test_error_response_shape():
    assert NotFoundError("Company 'x' not found.").to_response() == {
        "error": {"message": "Company 'x' not found.", "status": 404}
    }


def test_classify_postgres_codes():
    assert classify_integrity_error(_integrity(FakeDriverError(pgcode="23503"))) == "foreign_key"
    assert classify_integrity_error(_integrity(FakeDriverError(pgcode="23505"))) == "unique"
    assert classify_integrity_error(_integrity(FakeDriverError(sqlstate="23503"))) == "foreign_key"


def test_classify_sqlite_messages():
    fk = FakeDriverError("FOREIGN KEY constraint failed")
    unique = FakeDriverError("UNIQUE constraint failed: companies.code")

    assert classify_integrity_error(_integrity(fk)) == "foreign_key"
    assert classify_integrity_error(_integrity(unique)) == "unique"


def test_classify_other():
    orig = FakeDriverError("NOT NULL constraint failed: invoices.amt", pgcode="23502")

    assert classify_integrity_error(_integrity(orig)) == "other"


def test_database_failure_is_500(client, monkeypatch):
    """Store failures surface as 500 without internals."""

    def broken(db):
        raise OperationalError("SELECT ...", {}, Exception("connection lost"))

    monkeypatch.setattr(company_service, "list_companies", broken)

    resp = client.get("/companies")

    assert resp.status_code == 500
    assert resp.json() == {
        "error": {"message": "Error when querying database.", "status": 500}
    }


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/nowhere")

    assert resp.status_code == 404
    assert resp.json()["error"]["status"] == 404
