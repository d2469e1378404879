from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from biztime.core.db import get_db
from biztime.schemas.industry_schema import (
    IndustryCreate,
    IndustryDetailResponse,
    IndustryListResponse,
    IndustryOut,
    IndustryResponse,
)
from biztime.services import industry_service

router = APIRouter()


@router.get("", response_model=IndustryListResponse)
def list_industries_route(db: Session = Depends(get_db)):
    return {"industries": industry_service.list_industries(db)}


@router.get("/{code}", response_model=IndustryDetailResponse)
def get_industry_route(code: str, db: Session = Depends(get_db)):
    return {"industry": industry_service.get_industry(db, code)}


@router.post("", response_model=IndustryResponse, status_code=status.HTTP_201_CREATED)
def create_industry_route(payload: IndustryCreate, db: Session = Depends(get_db)):
    industry = industry_service.create_industry(db, payload)
    return IndustryResponse(industry=IndustryOut.model_validate(industry))
