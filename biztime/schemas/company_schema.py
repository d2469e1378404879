from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from biztime.schemas.common_schema import CodeRef


# ============================================================
# Request bodies
# ============================================================
class CompanyCreate(BaseModel):
    # code is derived from name, never taken from the body
    name: str = Field(min_length=1)
    description: Optional[str] = None


class CompanyUpdate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class IndustryAssociationCreate(BaseModel):
    industry_code: str = Field(min_length=1)


# ============================================================
# OUT Schemas
# ============================================================
class CompanySummary(BaseModel):
    code: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class CompanyOut(CompanySummary):
    description: Optional[str] = None


class CompanyDetail(CompanyOut):
    industries: List[str] = []
    invoices: List[int] = []


# ============================================================
# Response envelopes
# ============================================================
class CompanyListResponse(BaseModel):
    companies: List[CompanySummary]


class CompanyResponse(BaseModel):
    company: CompanyOut


class CompanyDetailResponse(BaseModel):
    company: CompanyDetail


class IndustryAssociationResponse(BaseModel):
    company: CodeRef
    industry: CodeRef
