"""Shared pytest fixtures for biztime tests.

Every test gets a fresh in-memory SQLite database (foreign keys on) and a
TestClient whose get_db dependency is bound to it.
"""

import os

# Set before any biztime import reads the settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import biztime.core.db as db_module
from biztime.core.db import Base, get_db, init_db
from biztime.main import app
from biztime.models.company_model import Company
from biztime.models.industry_model import Industry, companies_industries
from biztime.models.invoice_model import Invoice


@pytest.fixture
def engine():
    """In-memory database shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Session for seeding and inspecting the database directly."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(engine, session_factory, monkeypatch):
    """TestClient with get_db overridden to use the test database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # startup init_db and /health use the module-level engine
    monkeypatch.setattr(db_module, "engine", engine)

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def company1(db):
    company = Company(code="co1", name="company1", description="abc")
    db.add(company)
    db.commit()
    return {"code": "co1", "name": "company1", "description": "abc"}


@pytest.fixture
def industry1(db):
    industry = Industry(code="ind1", industry="industry1")
    db.add(industry)
    db.commit()
    return {"code": "ind1", "industry": "industry1"}


@pytest.fixture
def invoice1(db, company1):
    invoice = Invoice(comp_code=company1["code"], amt=1)
    db.add(invoice)
    db.commit()
    db.refresh(invoice)
    return {"id": invoice.id, "comp_code": invoice.comp_code, "amt": invoice.amt}


@pytest.fixture
def link(db):
    """Insert companies_industries rows directly."""

    def _link(comp_code: str, industry_code: str) -> None:
        db.execute(
            companies_industries.insert().values(
                comp_code=comp_code, industry_code=industry_code
            )
        )
        db.commit()

    return _link
