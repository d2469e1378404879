from pydantic import BaseModel, ConfigDict, Field
from typing import List


class IndustryCreate(BaseModel):
    code: str = Field(min_length=1)
    industry: str = Field(min_length=1)


class IndustryOut(BaseModel):
    code: str
    industry: str

    model_config = ConfigDict(from_attributes=True)


class IndustryWithCompanies(IndustryOut):
    comp_codes: List[str] = []


class IndustryResponse(BaseModel):
    industry: IndustryOut


class IndustryDetailResponse(BaseModel):
    industry: IndustryWithCompanies


class IndustryListResponse(BaseModel):
    industries: List[IndustryWithCompanies]
