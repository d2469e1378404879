from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime


# ============================================================
# Create Schema
# ============================================================
class InvoiceCreate(BaseModel):
    comp_code: str
    amt: float


# ============================================================
# Update Schema
# ============================================================
class InvoiceUpdate(BaseModel):
    """
    amt is always written. paid is optional:
    true  -> mark paid (paid_date stamped if not already set)
    false -> mark unpaid (paid_date cleared)
    absent or null -> payment state left as persisted
    """
    amt: float
    paid: Optional[bool] = None


# ============================================================
# OUT Schemas
# ============================================================
class InvoiceSummary(BaseModel):
    id: int
    comp_code: str

    model_config = ConfigDict(from_attributes=True)


class InvoiceOut(InvoiceSummary):
    amt: float
    paid: bool
    add_date: datetime
    paid_date: Optional[datetime] = None


class InvoiceCompany(BaseModel):
    code: str
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class InvoiceDetail(BaseModel):
    id: int
    amt: float
    paid: bool
    add_date: datetime
    paid_date: Optional[datetime] = None
    company: InvoiceCompany


# ============================================================
# Response envelopes
# ============================================================
class InvoiceListResponse(BaseModel):
    invoices: List[InvoiceSummary]


class InvoiceResponse(BaseModel):
    invoice: InvoiceOut


class InvoiceDetailResponse(BaseModel):
    invoice: InvoiceDetail
