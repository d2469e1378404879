"""Tests for the /industries routes."""

from biztime.models.company_model import Company
from biztime.models.industry_model import Industry


def test_create_industry(client):
    resp = client.post("/industries", json={"code": "acct", "industry": "Accounting"})

    assert resp.status_code == 201
    assert resp.json() == {"industry": {"code": "acct", "industry": "Accounting"}}


def test_create_industry_duplicate_conflicts(client, industry1):
    resp = client.post("/industries", json={"code": "ind1", "industry": "again"})

    assert resp.status_code == 409


def test_create_industry_missing_fields(client):
    resp = client.post("/industries", json={"code": "acct"})

    assert resp.status_code == 400


def test_list_industries(client, db, company1, industry1, link):
    """Each industry lists the codes of the companies linked to it."""
    db.add(Company(code="co2", name="company2", description="xyz"))
    db.add(Industry(code="ind2", industry="industry2"))
    db.commit()
    link("co1", "ind1")
    link("co2", "ind1")

    resp = client.get("/industries")

    assert resp.status_code == 200
    assert resp.json() == {
        "industries": [
            {"code": "ind1", "industry": "industry1", "comp_codes": ["co1", "co2"]},
            {"code": "ind2", "industry": "industry2", "comp_codes": []},
        ]
    }


def test_list_industries_without_companies(client, industry1):
    """No linked companies gives an empty list, not [None]."""
    resp = client.get("/industries")

    assert resp.json()["industries"][0]["comp_codes"] == []


def test_list_industries_empty(client):
    resp = client.get("/industries")

    assert resp.status_code == 200
    assert resp.json() == {"industries": []}


def test_get_industry(client, company1, industry1, link):
    link("co1", "ind1")

    resp = client.get("/industries/ind1")

    assert resp.status_code == 200
    assert resp.json() == {
        "industry": {"code": "ind1", "industry": "industry1", "comp_codes": ["co1"]}
    }


def test_get_industry_not_found(client):
    resp = client.get("/industries/nope")

    assert resp.status_code == 404


def test_industry_link_removed_with_company(client, company1, industry1, link):
    link("co1", "ind1")

    client.delete("/companies/co1")

    resp = client.get("/industries/ind1")
    assert resp.json()["industry"]["comp_codes"] == []
