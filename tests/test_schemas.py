"""Tests for the pydantic schemas."""

import importlib
import warnings

import pytest

from biztime.models.company_model import Company
from biztime.schemas import company_schema, industry_schema, invoice_schema
from biztime.schemas.company_schema import CompanyOut


@pytest.mark.parametrize("module", [company_schema, industry_schema, invoice_schema])
def test_schemas_define_without_deprecation_warnings(module):
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        importlib.reload(module)

    assert [w for w in caught if issubclass(w.category, DeprecationWarning)] == []


def test_out_schema_reads_orm_attributes():
    company = Company(code="co1", name="company1", description="abc")

    out = CompanyOut.model_validate(company)

    assert out.model_dump() == {"code": "co1", "name": "company1", "description": "abc"}
