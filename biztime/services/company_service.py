import logging

from sqlalchemy.orm import Session

from biztime.core.db import write_scope
from biztime.core.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    company_not_found,
)
from biztime.core.slug import make_code
from biztime.models.company_model import Company
from biztime.models.industry_model import Industry, companies_industries
from biztime.models.invoice_model import Invoice
from biztime.schemas.company_schema import CompanyCreate, CompanyUpdate
from biztime.services.grouping import group_rows

logger = logging.getLogger(__name__)


def list_companies(db: Session):
    rows = db.query(Company.code, Company.name).order_by(Company.code).all()
    return [{"code": r.code, "name": r.name} for r in rows]


def get_company(db: Session, code: str) -> dict:
    """
    Full view of one company: its own fields, the names of its industries
    and the ids of its invoices.
    """
    rows = (
        db.query(Company.code, Company.name, Company.description, Industry.industry)
        .outerjoin(companies_industries, companies_industries.c.comp_code == Company.code)
        .outerjoin(Industry, Industry.code == companies_industries.c.industry_code)
        .filter(Company.code == code)
        .order_by(Industry.industry)
        .all()
    )
    groups = group_rows(rows, key=lambda r: r.code, child=lambda r: r.industry)
    if code not in groups:
        logger.debug("Company lookup missed: %s", code)
        raise NotFoundError(company_not_found(code))

    company, industries = groups[code]

    invoice_ids = [
        invoice_id
        for (invoice_id,) in db.query(Invoice.id)
        .filter(Invoice.comp_code == code)
        .order_by(Invoice.id)
    ]

    return {
        "code": company.code,
        "name": company.name,
        "description": company.description,
        "industries": industries,
        "invoices": invoice_ids,
    }


def create_company(db: Session, payload: CompanyCreate) -> Company:
    code = make_code(payload.name)
    if not code:
        raise InvalidInputError("Company name must contain at least one letter or digit.")

    company = Company(code=code, name=payload.name, description=payload.description)
    with write_scope(db, on_unique=ConflictError(f"Company '{code}' already exists.")):
        db.add(company)

    db.refresh(company)
    logger.info("Created company %s", company.code)
    return company


def update_company(db: Session, code: str, payload: CompanyUpdate) -> Company:
    company = db.query(Company).filter(Company.code == code).first()
    if company is None:
        raise NotFoundError(company_not_found(code))

    with write_scope(db):
        # code is never touched
        company.name = payload.name
        company.description = payload.description

    db.refresh(company)
    logger.info("Updated company %s", company.code)
    return company


def delete_company(db: Session, code: str) -> None:
    with write_scope(db):
        # Invoices and industry links go with it (ON DELETE CASCADE)
        deleted = (
            db.query(Company)
            .filter(Company.code == code)
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            raise NotFoundError(company_not_found(code))

    logger.info("Deleted company %s", code)


def add_industry(db: Session, code: str, industry_code: str) -> dict:
    """
    Link an existing company to an existing industry.

    Either side missing surfaces as a foreign-key violation from the store,
    reported as NotFoundError; the association table is left unchanged.
    """
    with write_scope(
        db,
        on_foreign_key=NotFoundError(
            f"Company '{code}' or industry '{industry_code}' not found."
        ),
        on_unique=ConflictError(
            f"Company '{code}' is already in industry '{industry_code}'."
        ),
    ):
        db.execute(
            companies_industries.insert().values(
                comp_code=code, industry_code=industry_code
            )
        )

    logger.info("Linked company %s to industry %s", code, industry_code)
    return {"company": {"code": code}, "industry": {"code": industry_code}}
