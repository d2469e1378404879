import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from biztime.core.db import write_scope
from biztime.core.errors import ConflictError, NotFoundError, industry_not_found
from biztime.models.company_model import Company
from biztime.models.industry_model import Industry, companies_industries
from biztime.schemas.industry_schema import IndustryCreate
from biztime.services.grouping import group_rows

logger = logging.getLogger(__name__)


def _industries_with_companies(db: Session, code: Optional[str] = None) -> List[dict]:
    """
    Industries left-joined to the companies that reference them, one dict per
    industry in first-seen order, each with its (possibly empty) comp_codes.
    """
    query = (
        db.query(Industry.code, Industry.industry, Company.code.label("comp_code"))
        .outerjoin(companies_industries, companies_industries.c.industry_code == Industry.code)
        .outerjoin(Company, Company.code == companies_industries.c.comp_code)
    )
    if code is not None:
        query = query.filter(Industry.code == code)

    rows = query.order_by(Industry.code, Company.code).all()
    groups = group_rows(rows, key=lambda r: r.code, child=lambda r: r.comp_code)

    return [
        {"code": row.code, "industry": row.industry, "comp_codes": comp_codes}
        for row, comp_codes in groups.values()
    ]


def list_industries(db: Session) -> List[dict]:
    return _industries_with_companies(db)


def get_industry(db: Session, code: str) -> dict:
    found = _industries_with_companies(db, code)
    if not found:
        raise NotFoundError(industry_not_found(code))
    return found[0]


def create_industry(db: Session, payload: IndustryCreate) -> Industry:
    industry = Industry(code=payload.code, industry=payload.industry)
    conflict = ConflictError(f"Industry '{payload.code}' already exists.")
    with write_scope(db, on_unique=conflict):
        db.add(industry)

    db.refresh(industry)
    logger.info("Created industry %s", industry.code)
    return industry
