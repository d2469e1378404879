from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from biztime.core.db import get_db
from biztime.schemas.common_schema import DeletedResponse
from biztime.schemas.company_schema import (
    CompanyCreate,
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyOut,
    CompanyResponse,
    CompanyUpdate,
    IndustryAssociationCreate,
    IndustryAssociationResponse,
)
from biztime.services import company_service

router = APIRouter()


@router.get("", response_model=CompanyListResponse)
def list_companies_route(db: Session = Depends(get_db)):
    return {"companies": company_service.list_companies(db)}


@router.get("/{code}", response_model=CompanyDetailResponse)
def get_company_route(code: str, db: Session = Depends(get_db)):
    return {"company": company_service.get_company(db, code)}


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def create_company_route(payload: CompanyCreate, db: Session = Depends(get_db)):
    company = company_service.create_company(db, payload)
    return CompanyResponse(company=CompanyOut.model_validate(company))


@router.put("/{code}", response_model=CompanyResponse)
def update_company_route(code: str, payload: CompanyUpdate, db: Session = Depends(get_db)):
    company = company_service.update_company(db, code, payload)
    return CompanyResponse(company=CompanyOut.model_validate(company))


@router.delete("/{code}", response_model=DeletedResponse)
def delete_company_route(code: str, db: Session = Depends(get_db)):
    company_service.delete_company(db, code)
    return DeletedResponse()


@router.post(
    "/{code}/industries",
    response_model=IndustryAssociationResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_company_industry_route(
    code: str,
    payload: IndustryAssociationCreate,
    db: Session = Depends(get_db),
):
    return company_service.add_industry(db, code, payload.industry_code)
